DEFAULT_PORT = 3306
CONNECTION_ENV_VAR = "SQLTASKS_CONNECTION"

# mysql.connector error numbers we translate
ER_BAD_DB_ERROR = 1049
ER_NO_SUCH_THREAD = 1094
CR_NETWORK_ERRORS = frozenset({2002, 2003, 2005, 2006, 2013})

# What an unescaped backslash in a normal string literal turns into
ESCAPE_CONTROL_CHARS = "\v\t\b\f\a\r"

LOCAL_INSTANCE_HINT = (
    "Looks like you are trying to connect to a local instance. Have you correctly "
    "escaped your connection string? Backslashes must be doubled or the string "
    "written as a raw literal, e.g. r\"Server=(localdb)\\v12.0;...\""
)
