"""Configuration and the webhook server for the Telegram front-end."""
