# Firestore collections
USERS_COLLECTION = "users"
MESSAGES_COLLECTION = "messages"

# Document read on startup to verify Firestore connectivity
CONNECTION_CHECK_COLLECTION = "user"
CONNECTION_CHECK_DOC = "connection_check"

STATUS_OFFLINE = "offline"

PASSWORD_HASH_ROUNDS = 10
BCRYPT_MAX_PASSWORD_BYTES = 72

NEW_MESSAGE_TITLE = "New Message"

DEFAULT_SERVICE_ACCOUNT_PATH = "serviceAccountKey.json"
