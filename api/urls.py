from django.urls import path
from . import views

urlpatterns = [
    # Health check
    path("health", views.health, name="health"),

    # Accounts (Firebase Auth + users collection)
    path("register", views.register, name="register"),
    path("login", views.login, name="login"),
    path("logout", views.logout, name="logout"),
    path("users", views.list_users, name="list_users"),

    # Messaging (messages collection + FCM)
    path("send-message", views.send_message, name="send_message"),
    path("get-messages", views.get_messages, name="get_messages"),
]
