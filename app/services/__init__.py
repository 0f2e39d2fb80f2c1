# Services package.
#
# comment_service  - create and list guest book entries
#
# Service functions take the CommentGateway as their first argument so
# that the application decides which gateway (real or fake) is in use.
