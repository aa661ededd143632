# Services package.
#
# Each module holds the rules for one part of the domain:
#
#   auth_service: credential verification and bearer tokens
#   blog_service: create/update/delete/list rules for blogs
#   user_service: account registration and listing
#
# Service functions take repositories (and capabilities such as the
# token service or password hasher) as arguments; the router layer
# builds them per request and owns the transaction via ``get_db``.
