from src.shift_roster.shift_roster.database.bootstrap import _strip_create_db_and_use, iter_sql_statements


def test_splitter_handles_quotes_and_comments():
    sql = """
    -- shifts
    INSERT INTO shifts (shift_name) VALUES ('Night; late');
    INSERT INTO stores (store_name) VALUES ("Main -- store"); -- trailing
    UPDATE stores SET store_name = 'O\\'Brien' WHERE store_id = 1
    """

    statements = list(iter_sql_statements(sql))

    assert statements == [
        "INSERT INTO shifts (shift_name) VALUES ('Night; late')",
        'INSERT INTO stores (store_name) VALUES ("Main -- store")',
        "UPDATE stores SET store_name = 'O\\'Brien' WHERE store_id = 1",
    ]


def test_create_database_and_use_lines_are_dropped():
    sql = "CREATE DATABASE IF NOT EXISTS shift_roster;\nUSE shift_roster;\nCREATE TABLE t (id INT);\n"
    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]
