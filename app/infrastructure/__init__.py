"""Infrastructure modules for the application.

Centralized infrastructure components:
- configuration: Settings management (Settings, I18nSettings, PreferencesSettings)
- logging: Structured logging (get_module_logger, bind_request_context)
- i18n: Message catalogs, template and locale resolution
- operations: Operation results returned by store calls
- persistence: Settings record stores (in-memory, DynamoDB)
- services: Application-scoped providers (get_settings, get_translation_service)
"""
