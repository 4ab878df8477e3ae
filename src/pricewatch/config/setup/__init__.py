"""
⚙️ Складання застосунку: DI-контейнер і реєстрація хендлерів.
"""
