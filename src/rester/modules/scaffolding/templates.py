"""Source templates for generated request definitions."""

import re


def to_module_name(class_name: str) -> str:
    """Convert a class name to a module name, e.g. "GetUserApi" -> "get_user_api"."""
    name = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", class_name)
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    return name.replace("-", "_").lower()


def base_class_name(group: str) -> str:
    return f"{group}Base"


def get_standalone_template(class_name: str, group: str) -> str:
    """Leaf definition that supplies its own final endpoint."""
    return f'''"""{class_name} request definition ({group} group)."""

from rester import Rester


class {class_name}(Rester):
    def set_final_endpoint(self) -> str:
        # TODO: return the full endpoint URL.
        raise NotImplementedError
'''


def get_template(class_name: str, group: str) -> str:
    """Leaf definition extending the group's base class."""
    base_name = base_class_name(group)
    return f'''"""{class_name} request definition ({group} group)."""

from .{to_module_name(base_name)} import {base_name}


class {class_name}({base_name}):
    pass
'''


def get_base_template(class_name: str, group: str) -> str:
    """Group base class that supplies the shared base URL."""
    return f'''"""Base request definition for the {group} group."""

from rester import Rester


class {class_name}(Rester):
    def set_base_url(self) -> str:
        # TODO: return the base URL shared by the {group} group.
        raise NotImplementedError
'''
