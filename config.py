import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    SENDGRID_API_KEY = os.environ.get('SENDGRID_API_KEY')
    EMAIL_FROM = os.environ.get('EMAIL_FROM')
    DISPATCH_SECRET = os.environ.get('DISPATCH_SECRET')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    FIREBASE_PROJECT_ID = os.environ.get('FIREBASE_PROJECT_ID', '')
    FIREBASE_INIT = True
