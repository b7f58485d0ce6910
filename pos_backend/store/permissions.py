# store/permissions.py

from rest_framework.permissions import BasePermission

from store.models import StoreUser


# ---------------- STORE ACCESS PERMISSION ----------------
class HasStoreAccess(BasePermission):
    """
    The acting user must be a member of the store named in the URL (<store_id>).

    Superusers pass without a membership row.
    """

    message = "No access to this store"

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False

        store_id = view.kwargs.get("store_id")
        if store_id is None:
            return False

        if user.is_superuser:
            return True

        return StoreUser.objects.filter(store_id=store_id, user=user).exists()
