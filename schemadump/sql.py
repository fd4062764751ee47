"""
Statement templates used to query metadata and write the dump.

Output templates reproduce mysqldump's text, including its versioned
comment pragmas, so the result loads on any server version.
"""

from .templates import TemplateRegistry

SQL_TEMPLATES = {
    'variables': """\
  show variables
 where variable_name rlike('^(character_set_|collation_).*')
""",
    'tables': """\
select t.table_name as table_name,
       t.table_rows as table_rows,
       c.column_name as column_name,
       c.column_type as column_type,
       c.data_type as column_data_type,
       c.ordinal_position as ordinal_position
  from information_schema.tables as t
  join information_schema.columns as c using(table_schema, table_name)
 where t.table_type='%(table_type)'
   and t.table_schema='%(database)'
 order by t.table_name, c.ordinal_position
""",
    'routines': """\
select routine_name as routine_name,
       routine_comment as routine_comment,
       routine_type as routine_type,
       security_type as security_type,
       sql_mode as sql_mode,
       definer as definer,
       character_set_client as character_set_client,
       collation_connection as collation_connection,
       database_collation as database_collation
  from information_schema.routines
 where routine_type IN('PROCEDURE', 'FUNCTION')
       and routine_schema='%(database)'
 order by routine_type, routine_name
""",
    'triggers': """\
select trigger_name as trigger_name,
       event_manipulation as event_manipulation,
       event_object_table as event_object_table,
       action_orientation as action_orientation,
       action_timing as action_timing,
       sql_mode as sql_mode,
       definer as definer,
       character_set_client as character_set_client,
       collation_connection as collation_connection,
       database_collation as database_collation
  from information_schema.triggers
 where trigger_schema='%(database)'
 order by action_order
""",
    'show_create_table': """\
  show create table `%(table.table_name)`
""",
    'show_create_view': """\
  show create table `%(table.table_name)`
""",
    'show_create_routine': """\
  show create %(routine.routine_type) `%(routine.routine_name)`
""",
    'show_create_trigger': """\
  show create trigger `%(trigger.trigger_name)`
""",
    'rows': """\
select %(table.columns)
  from `%(table.table_name)`
""",
    'insert': """\
INSERT INTO `%(table.table_name)` VALUES
""",
    'lock_tables': """
LOCK TABLES `%(table.table_name)` WRITE;
/*!40000 ALTER TABLE `%(table.table_name)` DISABLE KEYS */;
""",
    'unlock_tables': """\
/*!40000 ALTER TABLE `%(table.table_name)` ENABLE KEYS */;
UNLOCK TABLES;
""",
    'create_table': """
/*!40101 SET @saved_cs_client     = @@character_set_client */;
/*!40101 SET character_set_client = %(character_set_connection) */;
DROP TABLE IF EXISTS `%(table.table_name)`;
%(table.create_table);
/*!40101 SET character_set_client = @saved_cs_client */;
""",
    'create_view_tmp': """
DROP TABLE IF EXISTS `%(table.table_name)`;
/*!50001 DROP VIEW IF EXISTS `%(table.table_name)` */;
SET @saved_cs_client     = @@character_set_client;
SET character_set_client = %(character_set_client);
/*!50001 CREATE TABLE `%(table.table_name)` (
%(table.create_view)
) ENGINE=MyISAM */;
SET character_set_client = @saved_cs_client;
""",
    'create_view': """
/*!50001 DROP TABLE IF EXISTS `%(table.table_name)` */;
/*!50001 DROP VIEW IF EXISTS `%(table.table_name)` */;
/*!50001 SET @saved_cs_client          = @@character_set_client */;
/*!50001 SET @saved_cs_results         = @@character_set_results */;
/*!50001 SET @saved_col_connection     = @@collation_connection */;
/*!50001 SET character_set_client      = %(character_set_client) */;
/*!50001 SET character_set_results     = %(character_set_results) */;
/*!50001 SET collation_connection      = %(collation_connection) */;
%(table.create_view);
/*!50001 SET character_set_client      = @saved_cs_client */;
/*!50001 SET character_set_results     = @saved_cs_results */;
/*!50001 SET collation_connection      = @saved_col_connection */;
/*!40103 SET TIME_ZONE=@OLD_TIME_ZONE */;
""",
    'create_routine': """
/*!50003 DROP %(routine.routine_type) IF EXISTS `%(routine.routine_name)` */ ;
/*!50003 SET @saved_cs_client      = @@character_set_client */ ;
/*!50003 SET @saved_cs_results     = @@character_set_results */ ;
/*!50003 SET @saved_col_connection = @@collation_connection */ ;
/*!50003 SET character_set_client  = %(character_set_connection) */ ;
/*!50003 SET character_set_results = %(character_set_results) */ ;
/*!50003 SET collation_connection  = %(collation_connection) */ ;
/*!50003 SET @saved_sql_mode       = @@sql_mode */ ;
/*!50003 SET sql_mode              = '%(routine.sql_mode)' */ ;

DELIMITER ;;
%(routine.create_routine) ;;
DELIMITER ;

/*!50003 SET sql_mode              = @saved_sql_mode */ ;
/*!50003 SET character_set_client  = @saved_cs_client */ ;
/*!50003 SET character_set_results = @saved_cs_results */ ;
/*!50003 SET collation_connection  = @saved_col_connection */ ;
""",
    'create_trigger': """
/*!50003 SET @saved_cs_client      = @@character_set_client  */ ;
/*!50003 SET @saved_cs_results     = @@character_set_results */ ;
/*!50003 SET @saved_col_connection = @@collation_connection  */ ;
/*!50003 SET character_set_client  = %(character_set_connection) */ ;
/*!50003 SET character_set_results = %(character_set_results) */ ;
/*!50003 SET collation_connection  = %(collation_connection) */ ;
/*!50003 SET @saved_sql_mode       = @@sql_mode */ ;
/*!50003 SET sql_mode              = '%(trigger.sql_mode)' */ ;

DELIMITER ;;
%(trigger.create_trigger) ;;
DELIMITER ;

/*!50003 SET sql_mode              = @saved_sql_mode       */ ;
/*!50003 SET character_set_client  = @saved_cs_client      */ ;
/*!50003 SET character_set_results = @saved_cs_results     */ ;
/*!50003 SET collation_connection  = @saved_col_connection */ ;
""",
    'begin': """\
/*!40101 SET @OLD_CHARACTER_SET_CLIENT=@@CHARACTER_SET_CLIENT */ ;
/*!40101 SET @OLD_CHARACTER_SET_RESULTS=@@CHARACTER_SET_RESULTS */ ;
/*!40101 SET @OLD_COLLATION_CONNECTION=@@COLLATION_CONNECTION */ ;
/*!40101 SET NAMES utf8mb4 */ ;
/*!40103 SET @OLD_TIME_ZONE=@@TIME_ZONE */ ;
/*!40103 SET TIME_ZONE='+00:00' */ ;
/*!40014 SET @OLD_UNIQUE_CHECKS=@@UNIQUE_CHECKS, UNIQUE_CHECKS=0 */ ;
/*!40014 SET @OLD_FOREIGN_KEY_CHECKS=@@FOREIGN_KEY_CHECKS, FOREIGN_KEY_CHECKS=0 */ ;
/*!40101 SET @OLD_SQL_MODE=@@SQL_MODE, SQL_MODE='NO_AUTO_VALUE_ON_ZERO' */ ;
/*!40111 SET @OLD_SQL_NOTES=@@SQL_NOTES, SQL_NOTES=0 */ ;
""",
    'end': """\
/*!40103 SET TIME_ZONE=@OLD_TIME_ZONE */ ;
/*!40101 SET SQL_MODE=@OLD_SQL_MODE */ ;
/*!40014 SET FOREIGN_KEY_CHECKS=@OLD_FOREIGN_KEY_CHECKS */ ;
/*!40014 SET UNIQUE_CHECKS=@OLD_UNIQUE_CHECKS */ ;
/*!40101 SET CHARACTER_SET_CLIENT=@OLD_CHARACTER_SET_CLIENT */ ;
/*!40101 SET CHARACTER_SET_RESULTS=@OLD_CHARACTER_SET_RESULTS */ ;
/*!40101 SET COLLATION_CONNECTION=@OLD_COLLATION_CONNECTION */ ;
/*!40111 SET SQL_NOTES=@OLD_SQL_NOTES */ ;
""",
}

TEMPLATES = TemplateRegistry(SQL_TEMPLATES)
