"""
Rewrites of server-returned CREATE statements into version-gated comments.

Each rewrite is a literal pattern substitution; statements that do not
match are returned unchanged.
"""

import re

VIEW_PATTERN = re.compile(
    r'^CREATE (ALGORITHM=.*?) (DEFINER=.*?) VIEW (.+)$', re.DOTALL
)
VIEW_REPLACEMENT = '/*!50001 CREATE \\1 */\n/*!50013 \\2 */\n/*!50001 VIEW \\3 */'

TRIGGER_PATTERN = re.compile(r'^CREATE (DEFINER=.*?) TRIGGER (.*)', re.DOTALL)
TRIGGER_REPLACEMENT = '/*!50003 CREATE */ /*!50017 \\1 */ /*!50003 TRIGGER \\2 */'

ROUTINE_PATTERN = re.compile(
    r'^CREATE (DEFINER=.*?) (PROCEDURE|FUNCTION) (.*)', re.DOTALL
)
ROUTINE_REPLACEMENT = '/*!50003 CREATE */ /*!50020 \\1 */ /*!50003 \\2 \\3 */'


def rewrite_view_ddl(statement: str) -> str:
    """Split ``CREATE ALGORITHM=.. DEFINER=.. VIEW ..`` into gated parts.

    Groups: 1 the ALGORITHM clause, 2 the DEFINER clause (with any
    SQL SECURITY that follows it), 3 the view name and body.
    """
    return VIEW_PATTERN.sub(VIEW_REPLACEMENT, statement, count=1)


def rewrite_trigger_ddl(statement: str) -> str:
    """Move a trigger's DEFINER clause into a 50017 comment."""
    return TRIGGER_PATTERN.sub(TRIGGER_REPLACEMENT, statement, count=1)


def rewrite_routine_ddl(statement: str) -> str:
    """Move a procedure or function DEFINER clause into a 50020 comment."""
    return ROUTINE_PATTERN.sub(ROUTINE_REPLACEMENT, statement, count=1)
