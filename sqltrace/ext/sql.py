# event kinds
EXECUTE = "execute"
QUERY = "query"
PREPARE = "prepare"
PING = "ping"
BEGIN = "begin"
COMMIT = "commit"
ROLLBACK = "rollback"
CHECK = "check"  # argument coercion

# fields
KIND = "sql.kind"  # one of the event kinds above
QUERY_TEXT = "sql.query"  # the query text
ARGS = "sql.args"  # bound arguments, as passed by the caller
DURATION = "sql.duration"  # elapsed time of the delegate call, in seconds
ERROR = "sql.error"  # the exception raised by the delegate
CAPABILITY = "sql.capability"  # the optional capability the delegate lacks
ISOLATION = "sql.tx.isolation"
READ_ONLY = "sql.tx.read_only"
