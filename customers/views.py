import logging

from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import generics, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from accounts.models import Capability
from accounts.permissions import HasCapability, IsCustomer
from accounts.tokens import build_auth_payload

from .models import Customer
from .serializers import CustomerRegistrationSerializer, CustomerSerializer, LoyaltyAdjustmentSerializer

logger = logging.getLogger(__name__)


class CustomerRegistrationView(APIView):
    permission_classes = (AllowAny,)
    authentication_classes = ()
    throttle_classes = (ScopedRateThrottle,)
    throttle_scope = "registration"

    def post(self, request, *args, **kwargs):
        serializer = CustomerRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        customer = serializer.save()
        payload = build_auth_payload(customer.user, customer=CustomerSerializer(customer).data)
        return Response(payload, status=status.HTTP_201_CREATED)


class CustomerProfileView(generics.RetrieveUpdateAPIView):
    serializer_class = CustomerSerializer
    permission_classes = (IsCustomer,)

    def get_object(self):
        return get_object_or_404(Customer.objects.select_related("user"), user=self.request.user)


class AdminCustomerViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = CustomerSerializer
    permission_classes = (HasCapability(Capability.MANAGE_CUSTOMERS),)

    def get_queryset(self):
        queryset = Customer.objects.select_related("user")
        params = self.request.query_params
        if params.get("tier"):
            queryset = queryset.by_loyalty_tier(params["tier"])
        if params.get("status"):
            queryset = queryset.filter(status=params["status"])
        search = (params.get("search") or "").strip()
        if search:
            queryset = queryset.filter(
                Q(user__email__icontains=search)
                | Q(user__first_name__icontains=search)
                | Q(user__last_name__icontains=search)
                | Q(user__phone__icontains=search)
            )
        return queryset.order_by("-created_at")

    def perform_destroy(self, instance):
        instance.user.delete()

    @action(detail=True, methods=["post"])
    def loyalty(self, request, pk=None):
        customer = self.get_object()
        serializer = LoyaltyAdjustmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        points = serializer.validated_data["points"]
        balance = customer.adjust_loyalty_points(points)
        logger.info(
            "Loyalty points for customer %s adjusted by %s (%s) by %s",
            customer.pk,
            points,
            serializer.validated_data.get("reason") or "no reason given",
            request.user.pk,
        )
        return Response(
            {"loyalty_points": balance, "loyalty_tier": customer.loyalty_tier},
            status=status.HTTP_200_OK,
        )
