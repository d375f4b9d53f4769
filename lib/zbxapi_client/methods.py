from __future__ import annotations

import re

_CRUD = ("get", "create", "update", "delete")
_MASS = ("massadd", "massupdate", "massremove")

# API object -> remote methods it exposes.
_OBJECTS: dict[str, tuple[str, ...]] = {
    "action": _CRUD,
    "alert": ("get",),
    "apiinfo": ("version",),
    "application": _CRUD + ("massadd",),
    "auditlog": ("get",),
    "authentication": ("get", "update"),
    "autoregistration": ("get", "update"),
    "configuration": ("export", "import", "importcompare"),
    "connector": _CRUD,
    "correlation": _CRUD,
    "dashboard": _CRUD,
    "dcheck": ("get",),
    "dhost": ("get",),
    "discoveryrule": _CRUD + ("copy",),
    "drule": _CRUD,
    "dservice": ("get",),
    "event": ("get", "acknowledge"),
    "graph": _CRUD,
    "graphitem": ("get",),
    "graphprototype": _CRUD,
    "hanode": ("get",),
    "history": ("get", "clear"),
    "host": _CRUD + _MASS,
    "hostgroup": _CRUD + _MASS + ("propagate",),
    "hostinterface": _CRUD + ("massadd", "massremove", "replacehostinterfaces"),
    "hostprototype": _CRUD,
    "housekeeping": ("get", "update"),
    "httptest": _CRUD,
    "iconmap": _CRUD,
    "image": _CRUD,
    "item": _CRUD,
    "itemprototype": _CRUD,
    "maintenance": _CRUD,
    "map": _CRUD,
    "mediatype": _CRUD,
    "module": _CRUD,
    "problem": ("get",),
    "proxy": _CRUD,
    "regexp": _CRUD,
    "report": _CRUD,
    "role": _CRUD,
    "script": _CRUD + ("execute", "getscriptsbyhosts", "getscriptsbyevents"),
    "service": _CRUD + ("getsla",),
    "settings": ("get", "update"),
    "sla": _CRUD + ("getsli",),
    "task": ("get", "create"),
    "template": _CRUD + _MASS,
    "templatedashboard": _CRUD,
    "templategroup": _CRUD + _MASS + ("propagate",),
    "token": _CRUD + ("generate",),
    "trend": ("get",),
    "trigger": _CRUD + ("adddependencies", "deletedependencies"),
    "triggerprototype": _CRUD,
    "user": _CRUD + ("login", "logout", "checkAuthentication", "unblock", "provision", "resettotp"),
    "userdirectory": _CRUD + ("test",),
    "usergroup": _CRUD,
    "usermacro": _CRUD + ("createglobal", "updateglobal", "deleteglobal"),
    "valuemap": _CRUD,
}

ANONYMOUS_METHODS = frozenset({"apiinfo.version", "user.login"})

API_METHODS: dict[str, bool] = {
    f"{obj}.{name}": f"{obj}.{name}" not in ANONYMOUS_METHODS
    for obj, names in _OBJECTS.items()
    for name in names
}

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")


def python_name(method: str) -> str:
    """``usermacro.createGlobal`` -> ``usermacro_create_global``."""
    return _CAMEL_RE.sub(r"_\1", method).replace(".", "_").lower()


METHOD_BY_NAME: dict[str, str] = {python_name(m): m for m in API_METHODS}


def requires_auth(method: str) -> bool:
    return API_METHODS.get(method, True)
