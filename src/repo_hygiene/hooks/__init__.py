"""Git hook templates and the installer that writes them into a checkout."""

from .installer import hook_status, install_hooks, uninstall_hooks
from .templates import (
    HOOK_MARKER,
    HOOK_TEMPLATES,
    HookOptions,
    get_hook_template,
    is_managed,
    render_hook,
)

__all__ = [
    # Templates
    "HOOK_MARKER",
    "HOOK_TEMPLATES",
    "HookOptions",
    "get_hook_template",
    "is_managed",
    "render_hook",
    # Installation
    "hook_status",
    "install_hooks",
    "uninstall_hooks",
]
