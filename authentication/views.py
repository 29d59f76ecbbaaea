# authentication/views.py
import logging

from django.contrib.auth import get_user_model
from django.utils import timezone
from django.views.decorators.debug import sensitive_post_parameters
from django.utils.decorators import method_decorator
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.authentication import issue_token
from authentication.serializers import (
    ChangePasswordSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
)
from users.serializers import UserSerializer

logger = logging.getLogger(__name__)

User = get_user_model()

sensitive_post_parameters_m = method_decorator(
    sensitive_post_parameters("password", "current_password", "new_password"),
    name="dispatch",
)


@sensitive_post_parameters_m
class RegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        description="Create a student, counsellor or admin account and return a bearer token.",
        summary="Register",
        tags=["Auth"],
        request=RegisterSerializer,
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"Registered {user.role} account {user.username}")

        return Response(
            {
                "message": "User registered successfully",
                "user": UserSerializer(user).data,
                "token": issue_token(user),
            },
            status=status.HTTP_201_CREATED,
        )


@sensitive_post_parameters_m
class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        description="Exchange email and password for a bearer token.",
        summary="Login",
        tags=["Auth"],
        request=LoginSerializer,
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]
        password = serializer.validated_data["password"]

        user = User.objects.filter(email__iexact=email).first()
        if user is None:
            return Response(
                {"error": "Invalid email or password"},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        if not user.is_active:
            return Response(
                {"error": "Account is deactivated. Please contact support."},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        if not user.check_password(password):
            logger.info(f"Failed login attempt for user {user.id}")
            return Response(
                {"error": "Invalid email or password"},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        user.last_login = timezone.now()
        user.save(update_fields=["last_login"])

        return Response(
            {
                "message": "Login successful",
                "user": UserSerializer(user).data,
                "token": issue_token(user),
            }
        )


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Current user", tags=["Auth"], responses=UserSerializer)
    def get(self, request):
        return Response({"user": UserSerializer(request.user).data})


class ProfileUpdateView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        description="Merge the given profile and preferences fields into the caller's account.",
        summary="Update Profile",
        tags=["Auth"],
        request=ProfileUpdateSerializer,
    )
    def put(self, request):
        serializer = ProfileUpdateSerializer(request.user, data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        return Response(
            {
                "message": "Profile updated successfully",
                "user": UserSerializer(user).data,
            }
        )


@sensitive_post_parameters_m
class ChangePasswordView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Change Password", tags=["Auth"], request=ChangePasswordSerializer)
    def put(self, request):
        serializer = ChangePasswordSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)

        user = request.user
        if not user.check_password(serializer.validated_data["current_password"]):
            return Response(
                {"error": "Current password is incorrect"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        user.set_password(serializer.validated_data["new_password"])
        user.save(update_fields=["password", "updated_at"])
        logger.info(f"Password changed for user {user.id}")

        return Response({"message": "Password changed successfully"})


class LogoutView(APIView):
    """Tokens are stateless; the client discards its copy."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Logout", tags=["Auth"], request=None)
    def post(self, request):
        return Response({"message": "Logged out successfully"})


class RefreshTokenView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Refresh Token", tags=["Auth"], request=None)
    def post(self, request):
        return Response({"token": issue_token(request.user)})
