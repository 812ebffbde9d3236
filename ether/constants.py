"""HTTP constants for the request pipeline.

Centralizes status ranges, content types and header names shared by the
encoding, header resolution and classification stages.
"""

# HTTP Status Code Ranges
HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 300
HTTP_STATUS_CLIENT_ERROR_MIN = 400
HTTP_STATUS_SERVER_ERROR_MIN = 500
HTTP_STATUS_SERVER_ERROR_MAX = 600

# Any status outside this range is not a well-formed HTTP response
HTTP_STATUS_VALID_MIN = 100
HTTP_STATUS_VALID_MAX = 600

# Header names
HEADER_ACCEPT = "Accept"
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_CONTENT_ENCODING = "Content-Encoding"
HEADER_USER_AGENT = "User-Agent"

# Content types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_JSON_UTF8 = "application/json; charset=utf-8"
CONTENT_TYPE_FORM_URLENCODED = "application/x-www-form-urlencoded; charset=utf-8"
CONTENT_TYPE_MULTIPART_FORM = "multipart/form-data"

CONTENT_ENCODING_GZIP = "gzip"

# Multipart framing
MULTIPART_BOUNDARY_PREFIX = "Boundary-"
CRLF = "\r\n"

# Indentation used when serializing parameters to JSON
JSON_PARAMETER_INDENT = 2
