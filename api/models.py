# Models are stored in Firebase Firestore, not Django DB.
# This file is kept for Django app structure compatibility.
#
# Firestore Collections:
# - users/{uid}: email, password (bcrypt hash), status, notifications, createdAt, fcmToken
# - messages/{autoId}: senderUid, receiverUid, message, timestamp
#
# See chat_service.py for Firestore operations.
