"""
Точка входа для локального запуска:
    python main.py
или
    uvicorn userstub.main:app --reload
"""
from userstub.main import run

if __name__ == "__main__":
    run()
