# main.py

# load_dotenv harus jalan sebelum import app supaya Settings membaca .env
from dotenv import load_dotenv
load_dotenv(override=True)

from procurement_sync import create_app

# Uvicorn dipanggil dengan factory=True, jadi 'app' adalah factory-nya
app = create_app
