# Diagnostic events
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
INVALID_REQUEST = 'INVALID_REQUEST'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
