from torileq.constants import INTEGER_FIELDS, RECORD_FIELDS

ITEM_TABLES = ("neweq", "eq")

# Columns shown in the pending item list
SUMMARY_FIELDS = ["name", "TYPE", "worn", "wt", "VALUE", "ac", "hit", "dam", "keywords"]


def _quote(column):
    return '"%s"' % column


def _check_table(table):
    assert table in ITEM_TABLES, "Unknown item table: %s" % table


def _strip_nulls(row):
    if row is None:
        return None
    return {k: v for k, v in row.items() if v is not None}


def create_items_table(curs, table):
    _check_table(table)
    columns = ["  %s_id INTEGER PRIMARY KEY" % table]
    for field in RECORD_FIELDS:
        if field in INTEGER_FIELDS:
            columns.append("  %s INTEGER" % _quote(field))
        else:
            columns.append("  %s TEXT" % _quote(field))
    sql = '\n'.join([
        "CREATE TABLE IF NOT EXISTS %s (" % table,
        ",\n".join(columns),
        ")"])
    curs.execute(sql)


def create_items_index(curs, table):
    _check_table(table)
    sql = '\n'.join([
        "CREATE INDEX IF NOT EXISTS %s_name" % table,
        " ON %s (name)" % table])
    curs.execute(sql)


def insert_item(curs, table, record):
    _check_table(table)
    unknown = [k for k in record if k not in RECORD_FIELDS]
    if unknown:
        raise ValueError("Unknown item fields: %s" % ", ".join(sorted(unknown)))
    columns = [f for f in RECORD_FIELDS if f in record]
    values = [record[f] for f in columns]
    sql = '\n'.join([
        "INSERT INTO %s" % table,
        " (%s)" % ", ".join([_quote(c) for c in columns]),
        " VALUES",
        " (%s)" % ", ".join(["?"] * len(columns))])
    curs.execute(sql, values)
    return curs.lastrowid


def insert_neweq(curs, record):
    return insert_item(curs, "neweq", record)


def fetch_neweq_summaries(curs):
    sql = '\n'.join([
        "SELECT %s" % ", ".join([_quote(c) for c in SUMMARY_FIELDS]),
        " FROM neweq",
        " ORDER BY name"])
    curs.execute(sql)
    return curs.fetchall()


def fetch_item(curs, table, name):
    _check_table(table)
    sql = '\n'.join([
        "SELECT %s" % ", ".join([_quote(c) for c in RECORD_FIELDS]),
        " FROM %s" % table,
        " WHERE name = ?"])
    curs.execute(sql, [name])
    return _strip_nulls(curs.fetchone())


def fetch_neweq(curs, name):
    return fetch_item(curs, "neweq", name)


def update_neweq_stats(curs, name, short_stats, long_stats):
    sql = '\n'.join([
        "UPDATE neweq",
        " SET short_stats = ?, long_stats = ?",
        " WHERE name = ?"])
    curs.execute(sql, [short_stats, long_stats, name])
    return curs.rowcount


def delete_neweq(curs, name):
    sql = '\n'.join([
        "DELETE FROM neweq",
        " WHERE name = ?"])
    curs.execute(sql, [name])
    return curs.rowcount


def approve_neweq(conn, name):
    """Move a pending item from neweq into eq in a single transaction."""
    columns = ", ".join([_quote(c) for c in RECORD_FIELDS])
    curs = conn.cursor()
    try:
        sql = '\n'.join([
            "INSERT INTO eq (%s)" % columns,
            " SELECT %s" % columns,
            " FROM neweq",
            " WHERE name = ?"])
        curs.execute(sql, [name])
        if curs.rowcount < 1:
            raise LookupError("No pending item named '%s'" % name)
        delete_neweq(curs, name)
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        curs.close()


def search_eq_stats(curs, name, stats="short"):
    """Find approved items whose name contains every word of ``name``."""
    stats_col = "long_stats" if stats == "long" else "short_stats"
    words = name.split()
    if not words:
        return []
    sql = '\n'.join([
        "SELECT name, %s" % stats_col,
        " FROM eq",
        " WHERE %s" % " AND ".join(["name LIKE '%' || ? || '%'"] * len(words)),
        " ORDER BY name"])
    curs.execute(sql, words)
    return curs.fetchall()


def fetch_eq_zones(curs):
    sql = '\n'.join([
        "SELECT DISTINCT zone",
        " FROM eq",
        " WHERE zone IS NOT NULL",
        " ORDER BY zone"])
    curs.execute(sql)
    return [row["zone"] for row in curs.fetchall()]
