# frontend/urls.py
from django.urls import path
from frontend.views import PageView

urlpatterns = [
    path("", PageView.as_view(page="index"), name="home"),
    path("login", PageView.as_view(page="login"), name="login"),
    path("signup", PageView.as_view(page="signup"), name="signup"),
    path("dashboard", PageView.as_view(page="dashboard"), name="dashboard"),
    path("database-viewer", PageView.as_view(page="database_viewer"), name="database-viewer"),
]
