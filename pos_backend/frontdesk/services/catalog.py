# frontdesk/services/catalog.py

from __future__ import annotations

import uuid

from catalog.models import Service
from frontdesk.services.exceptions import ServiceNotFound


def store_services(*, store_id, service_ids) -> dict:
    """{id: Service} for every requested id; all must belong to the store."""
    wanted = list(dict.fromkeys(uuid.UUID(str(s)) for s in service_ids))
    found = {
        s.id: s for s in Service.objects.filter(store_id=store_id, id__in=wanted)
    }
    for service_id in wanted:
        if service_id not in found:
            raise ServiceNotFound(f"Service not found: {service_id}")
    return found
