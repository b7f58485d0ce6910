# store/models/store_user.py

import uuid

from django.conf import settings
from django.db import models

User = settings.AUTH_USER_MODEL


class StoreUser(models.Model):
    """
    Membership of a user in a store.

    Every store-scoped endpoint requires one of these rows for the acting user.
    """

    ROLE_OWNER = "owner"
    ROLE_MANAGER = "manager"
    ROLE_RECEPTION = "reception"
    ROLE_STAFF = "staff"

    ROLE_CHOICES = [
        (ROLE_OWNER, "Owner"),
        (ROLE_MANAGER, "Manager"),
        (ROLE_RECEPTION, "Reception"),
        (ROLE_STAFF, "Staff"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    store = models.ForeignKey(
        "store.Store",
        on_delete=models.CASCADE,
        related_name="memberships",
    )
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="store_memberships",
    )
    role = models.CharField(max_length=32, choices=ROLE_CHOICES, default=ROLE_STAFF)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["store", "user"]
        constraints = [
            models.UniqueConstraint(
                fields=["store", "user"],
                name="uniq_store_user_membership",
            ),
        ]

    def __str__(self):
        return f"{self.user_id} @ {self.store_id} ({self.role})"
