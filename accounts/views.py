import logging

from django.core.exceptions import ObjectDoesNotExist
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from .models import User
from .serializers import LoginSerializer, ProfileSerializer
from .tokens import blacklist_user_tokens, build_auth_payload

logger = logging.getLogger(__name__)


def _login_refusal(user: User) -> str | None:
    if user.is_admin and not user.can_access_dashboard:
        return "Admin account is not active"
    if user.is_employee:
        try:
            employee = user.employee_profile
        except ObjectDoesNotExist:
            return "Employee account not found."
        if employee.is_paused:
            return "Your account has been paused. Please contact your manager."
        if employee.is_inactive:
            return "Your account is inactive. Please contact your manager."
    return None


class LoginView(APIView):
    permission_classes = (permissions.AllowAny,)
    throttle_classes = (ScopedRateThrottle,)
    throttle_scope = "auth-login"

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]

        refusal = _login_refusal(user)
        if refusal:
            logger.info("Refused login for user %s: %s", user.pk, refusal)
            return Response({"detail": refusal}, status=status.HTTP_403_FORBIDDEN)

        return Response(build_auth_payload(user), status=status.HTTP_200_OK)


class ProfileView(generics.RetrieveUpdateAPIView):
    serializer_class = ProfileSerializer
    permission_classes = (permissions.IsAuthenticated,)

    def get_object(self):
        return self.request.user


class TokenRefreshView(APIView):
    permission_classes = (permissions.AllowAny,)
    authentication_classes = ()
    throttle_classes = (ScopedRateThrottle,)
    throttle_scope = "auth-refresh"

    def post(self, request, *args, **kwargs):
        raw_refresh = request.data.get("refresh")
        if not raw_refresh or not isinstance(raw_refresh, str):
            return Response({"detail": "Refresh token is required."}, status=status.HTTP_400_BAD_REQUEST)

        try:
            refresh_token = RefreshToken(raw_refresh)
        except TokenError:
            return Response({"detail": "Invalid refresh token."}, status=status.HTTP_401_UNAUTHORIZED)

        user_id = refresh_token.get("user_id")
        user = User.objects.filter(id=user_id, is_active=True).first()
        if not user or _login_refusal(user):
            return Response({"detail": "Refresh token is no longer valid."}, status=status.HTTP_401_UNAUTHORIZED)

        payload = build_auth_payload(user)

        try:
            refresh_token.blacklist()
        except TokenError:
            pass

        return Response(payload, status=status.HTTP_200_OK)


class LogoutView(APIView):
    permission_classes = (permissions.IsAuthenticated,)
    throttle_classes = (ScopedRateThrottle,)
    throttle_scope = "auth-logout"

    def post(self, request, *args, **kwargs):
        raw_refresh = request.data.get("refresh")
        all_sessions = bool(request.data.get("all"))

        if all_sessions:
            blacklist_user_tokens(request.user)
            return Response(status=status.HTTP_204_NO_CONTENT)

        if not raw_refresh or not isinstance(raw_refresh, str):
            return Response({"detail": "Refresh token is required."}, status=status.HTTP_400_BAD_REQUEST)

        try:
            refresh_token = RefreshToken(raw_refresh)
        except TokenError:
            return Response({"detail": "Invalid refresh token."}, status=status.HTTP_400_BAD_REQUEST)

        if str(refresh_token.get("user_id")) != str(request.user.id):
            return Response({"detail": "Token does not belong to the authenticated user."}, status=status.HTTP_403_FORBIDDEN)

        try:
            refresh_token.blacklist()
        except TokenError:
            pass

        return Response(status=status.HTTP_204_NO_CONTENT)
