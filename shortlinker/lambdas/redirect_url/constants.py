# Diagnostic events
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
