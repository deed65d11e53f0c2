"""
PocketTasks AI - Configuration Module

This module handles application configuration via environment variables.
"""

import os
from typing import Optional


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "PocketTasks AI"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # AI/LLM Configuration
    OPENAI_API_KEY: Optional[str] = os.getenv("OPENAI_API_KEY", None)
    MODEL_NAME: str = os.getenv("MODEL_NAME", "gpt-4o-mini")
    LLM_TIMEOUT: float = float(os.getenv("LLM_TIMEOUT", "10.0"))
    LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.2"))

    # Task storage: "file" (local blob), "mongo" or "memory"
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "file").lower()
    STORAGE_PATH: str = os.getenv("STORAGE_PATH", "pockettasks.json")
    STORAGE_KEY: str = os.getenv("STORAGE_KEY", "pocketTasksAI_tasks")

    # MongoDB (only used when STORAGE_BACKEND=mongo)
    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "pockettasks")

    # Task event history kept in memory
    TASK_EVENT_HISTORY_LIMIT: int = int(os.getenv("TASK_EVENT_HISTORY_LIMIT", "200"))

    # CORS - Allowed origins for client requests
    # Multiple origins can be comma-separated
    CORS_ORIGINS: list[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:9002,http://localhost:3000").split(",")
        if origin.strip()
    ]

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
