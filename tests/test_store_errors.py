from sqlalchemy.exc import OperationalError, ProgrammingError, TimeoutError as PoolTimeoutError

from school_registry.schools.exceptions import (
    DATABASE_ERROR,
    DATABASE_SETUP_REQUIRED,
    DATABASE_UNAVAILABLE,
    classify_store_error,
)


class FakePgError(Exception):
    def __init__(self, message, pgcode):
        super().__init__(message)
        self.pgcode = pgcode


def test_postgres_undefined_table_is_setup_required():
    orig = FakePgError('relation "schools" does not exist', "42P01")
    error = classify_store_error(ProgrammingError("SELECT * FROM schools", {}, orig))
    assert error.code == DATABASE_SETUP_REQUIRED
    assert "schools" in error.details


def test_mysql_missing_table_message_is_setup_required():
    orig = Exception("Table 'registry.schools' doesn't exist")
    assert classify_store_error(ProgrammingError("SELECT 1", {}, orig)).code == DATABASE_SETUP_REQUIRED


def test_connection_failures_are_unavailable():
    refused = OperationalError("SELECT 1", {}, Exception("could not connect to server: Connection refused"))
    assert classify_store_error(refused).code == DATABASE_UNAVAILABLE
    assert classify_store_error(PoolTimeoutError("QueuePool limit reached")).code == DATABASE_UNAVAILABLE


def test_other_failures_are_generic():
    orig = FakePgError('duplicate key value violates unique constraint "schools_pkey"', "23505")
    assert classify_store_error(ProgrammingError("INSERT", {}, orig)).code == DATABASE_ERROR


def test_missing_database_or_role_is_not_setup_required():
    missing_db = OperationalError("connect", {}, Exception('FATAL:  database "school_registry" does not exist'))
    assert classify_store_error(missing_db).code == DATABASE_UNAVAILABLE
    missing_role = OperationalError("connect", {}, Exception('FATAL:  role "registry" does not exist'))
    assert classify_store_error(missing_role).code == DATABASE_UNAVAILABLE


def test_sqlite_missing_table_is_setup_required():
    orig = Exception("no such table: schools")
    assert classify_store_error(OperationalError("SELECT", {}, orig)).code == DATABASE_SETUP_REQUIRED


def test_postgres_relation_message_without_pgcode_is_setup_required():
    orig = Exception('relation "schools" does not exist')
    assert classify_store_error(ProgrammingError("SELECT", {}, orig)).code == DATABASE_SETUP_REQUIRED
