"""Вспомогательные модули: настройки и логирование."""
