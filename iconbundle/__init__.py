"""Сборка иконок приложения и типов документов."""

__version__ = "1.0.0"
