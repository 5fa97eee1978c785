from urllib.parse import quote

from pessoa_api.config import Config


def create_alert(application_name: str, message: str, param: str) -> dict[str, str]:
    return {
        f"X-{application_name}-alert": message,
        f"X-{application_name}-params": quote(param, safe=""),
    }


def _entity_alert(action: str, article: str, entity_name: str, entity_id: str) -> dict[str, str]:
    app = Config.APPLICATION_NAME
    if Config.ENABLE_TRANSLATION:
        message = f"{app}.{entity_name}.{action}"
    else:
        message = f"{article} {entity_name} is {action} with identifier {entity_id}"
    return create_alert(app, message, entity_id)


def entity_creation_alert(entity_name: str, entity_id: str) -> dict[str, str]:
    return _entity_alert("created", "A new", entity_name, entity_id)


def entity_update_alert(entity_name: str, entity_id: str) -> dict[str, str]:
    return _entity_alert("updated", "A", entity_name, entity_id)


def entity_deletion_alert(entity_name: str, entity_id: str) -> dict[str, str]:
    return _entity_alert("deleted", "A", entity_name, entity_id)


def failure_alert(entity_name: str, error_key: str) -> dict[str, str]:
    app = Config.APPLICATION_NAME
    return {
        f"X-{app}-error": f"error.{error_key}",
        f"X-{app}-params": entity_name,
    }
