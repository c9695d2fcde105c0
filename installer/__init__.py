"""
Provisioning installers.

Each installer exposes functions taking ``(app_settings, current_logger=None)``;
``installer.catalog`` binds them into the menu's action registry.
"""
