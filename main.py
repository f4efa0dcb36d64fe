#!/usr/bin/env python3
"""
Icon Bundle
Сборка иконок приложения и типов документов из исходных PNG.

Запуск: python main.py
"""
import sys

from iconbundle.app import main


if __name__ == "__main__":
    sys.exit(main())
