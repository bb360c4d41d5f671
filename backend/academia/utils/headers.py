"""Alert headers attached to entity responses.

The frontend reads `X-<app>-alert` to show a notification and
`X-<app>-params` to fill in its placeholder (usually the entity id).
"""

from typing import Dict

from ..config import settings


def create_alert(message: str, param: str) -> Dict[str, str]:
    return {
        f'X-{settings.APP_NAME}-alert': message,
        f'X-{settings.APP_NAME}-params': param,
    }


def create_entity_creation_alert(entity_name: str, param) -> Dict[str, str]:
    return create_alert(f'{settings.APP_NAME}.{entity_name}.created', str(param))


def create_entity_update_alert(entity_name: str, param) -> Dict[str, str]:
    return create_alert(f'{settings.APP_NAME}.{entity_name}.updated', str(param))


def create_entity_deletion_alert(entity_name: str, param) -> Dict[str, str]:
    return create_alert(f'{settings.APP_NAME}.{entity_name}.deleted', str(param))


def create_failure_alert(entity_name: str, error_key: str) -> Dict[str, str]:
    return {
        f'X-{settings.APP_NAME}-error': f'error.{error_key}',
        f'X-{settings.APP_NAME}-params': entity_name,
    }
