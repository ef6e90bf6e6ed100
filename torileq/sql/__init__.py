import os
import sqlite3
from torileq.sql.items import create_items_table, create_items_index


def get_db_path(db_name):
    path = os.path.expanduser("~/.torileq")
    if not os.path.exists(path):
        os.makedirs(path)
    return os.path.abspath(path + "/" + db_name)


def create_tables(conn, curs):
    for table in ("neweq", "eq"):
        create_items_table(curs, table)
        create_items_index(curs, table)
    conn.commit()


def dict_factory(cursor, row):
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def get_db_connection(db):
    conn = sqlite3.connect(os.path.expanduser(db))
    curs = conn.cursor()
    try:
        create_tables(conn, curs)
    finally:
        curs.close()
    conn.row_factory = dict_factory
    return conn
