"""
DailyFocus - Core
Модели данных, исключения и хранилище записей
"""
