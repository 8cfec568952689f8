# Diagnostic events
MISSING_SHORTLINK = 'MISSING_SHORTLINK'
INFO_SUCCESS = 'INFO_SUCCESS'
