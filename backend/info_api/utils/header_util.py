"""
Info API — Entity Alert Headers
================================

What:  Builds the X-{app}-alert / X-{app}-error / X-{app}-params headers that
       tell the frontend which notification to show after a mutation.
How:   Messages are translation keys ("infoApp.thema.created",
       "error.idexists"); the params header carries the entity id or name,
       form-encoded so it is always a valid header value.
"""

from typing import Dict
from urllib.parse import quote_plus


def create_alert(application_name: str, message: str, param: str) -> Dict[str, str]:
    return {
        f"X-{application_name}-alert": message,
        f"X-{application_name}-params": quote_plus(param),
    }


def create_entity_creation_alert(application_name: str, entity_name: str, param: str) -> Dict[str, str]:
    return create_alert(application_name, f"{application_name}.{entity_name}.created", param)


def create_entity_update_alert(application_name: str, entity_name: str, param: str) -> Dict[str, str]:
    return create_alert(application_name, f"{application_name}.{entity_name}.updated", param)


def create_entity_deletion_alert(application_name: str, entity_name: str, param: str) -> Dict[str, str]:
    return create_alert(application_name, f"{application_name}.{entity_name}.deleted", param)


def create_failure_alert(application_name: str, entity_name: str, error_key: str) -> Dict[str, str]:
    """Headers attached to a 400 raised by BadRequestAlertError."""
    return {
        f"X-{application_name}-error": f"error.{error_key}",
        f"X-{application_name}-params": entity_name,
    }
