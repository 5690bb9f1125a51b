import os
from dotenv import load_dotenv

# 加载.env文件
load_dotenv()

# API相关配置
API_HOST = os.getenv('API_HOST', '0.0.0.0')
API_PORT = int(os.getenv('API_PORT', 5001))
API_DEBUG = os.getenv('API_DEBUG', 'False').lower() == 'true'

# 安全相关配置
SECRET_KEY = os.getenv('SECRET_KEY', 'dev_secret_key_12345')

# 数据库配置
DB_TYPE = os.getenv('DB_TYPE', 'sqlite')
DB_USER = os.getenv('DB_USER')
DB_PASSWORD = os.getenv('DB_PASSWORD')
DB_HOST = os.getenv('DB_HOST', 'localhost')
DB_PORT = os.getenv('DB_PORT', '5432')
DB_NAME = os.getenv('DB_NAME')
SQLALCHEMY_TRACK_MODIFICATIONS = False
SQLALCHEMY_ECHO = os.getenv('SQLALCHEMY_ECHO', 'False').lower() == 'true'

# 日志配置
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_DIR = os.getenv('LOG_DIR', 'logs')

# 后台路由配置
ADMIN_CATEGORIES_PATH = '/admin/categories'
TOOL_LIST_DEFAULT_LIMIT = int(os.getenv('TOOL_LIST_DEFAULT_LIMIT', 50))
TOOL_LIST_MAX_LIMIT = 500

# CORS配置
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv('CORS_ORIGINS', 'http://localhost:3000,http://localhost:3001').split(',')
    if origin.strip()
]

# 获取数据库URI
def get_database_uri():
    """构建数据库URI"""
    database_url = os.getenv('DATABASE_URL')
    if database_url:
        return database_url
    if DB_TYPE == 'postgresql':
        return f'postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}'
    # 默认使用SQLite
    return 'sqlite:///' + os.path.join(os.path.abspath(os.path.dirname(__file__)), 'backoffice.db')
