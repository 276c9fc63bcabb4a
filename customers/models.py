from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.db import models

LOYALTY_TIERS = (
    ("Platinum", 2500),
    ("Gold", 1000),
    ("Silver", 500),
    ("Bronze", 0),
)


def loyalty_tier_for(points: int) -> str:
    for tier, threshold in LOYALTY_TIERS:
        if points >= threshold:
            return tier
    return "Bronze"


class CustomerQuerySet(models.QuerySet):
    def active(self):
        return self.filter(status=Customer.Status.ACTIVE)

    def by_loyalty_tier(self, tier: str | None):
        tier = (tier or "").strip().lower()
        if tier == "platinum":
            return self.filter(loyalty_points__gte=2500)
        if tier == "gold":
            return self.filter(loyalty_points__gte=1000, loyalty_points__lt=2500)
        if tier == "silver":
            return self.filter(loyalty_points__gte=500, loyalty_points__lt=1000)
        if tier == "bronze":
            return self.filter(loyalty_points__lt=500)
        return self


class Customer(models.Model):
    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        INACTIVE = "inactive", "Inactive"

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        related_name="customer_profile",
        on_delete=models.CASCADE,
    )
    home_location = models.CharField(max_length=255, blank=True)
    loyalty_points = models.PositiveIntegerField(default=0)
    total_orders = models.PositiveIntegerField(default=0)
    total_spent = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    preferences = models.JSONField(blank=True, default=dict)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.ACTIVE)
    last_visit = models.DateTimeField(blank=True, null=True)

    objects = CustomerQuerySet.as_manager()

    class Meta:
        ordering = ("-created_at",)
        indexes = [
            models.Index(fields=("status", "loyalty_points"), name="customer_loyalty_idx"),
        ]

    def __str__(self) -> str:
        return f"Customer<{self.user.email}>"

    @property
    def loyalty_tier(self) -> str:
        return loyalty_tier_for(self.loyalty_points)

    def adjust_loyalty_points(self, points: int) -> int:
        """Add (or with a negative value, remove) points without dropping below zero."""

        self.loyalty_points = max(0, self.loyalty_points + int(points))
        self.save(update_fields=("loyalty_points", "updated_at"))
        return self.loyalty_points
