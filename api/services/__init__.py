"""
High-level use cases for the storage API.

Each service module orchestrates the document store or the mailer to
implement one concern (user collection, settings/messages singletons,
verification e-mails). Routers call these services instead of touching the
JSON files directly.
"""
