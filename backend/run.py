#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
目录站后台服务启动脚本

使用方法：
1. 启动开发服务器：python run.py
2. 使用gunicorn部署：gunicorn -w 2 -b 0.0.0.0:5001 "run:app"
3. 数据库迁移：flask --app run db upgrade
4. 初始化分类数据：flask --app run init-db
"""

import os
import sys
import logging
from dotenv import load_dotenv

# 创建logs目录
os.makedirs('logs', exist_ok=True)

# 配置日志记录
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler('logs/app.log')
    ]
)
logger = logging.getLogger(__name__)

from backoffice import create_app  # noqa: E402
from backoffice.config import API_HOST, API_PORT, API_DEBUG  # noqa: E402

# 创建Flask应用实例 - 为gunicorn提供
app = create_app()

# 直接运行此脚本时启动Flask开发服务器
if __name__ == '__main__':
    load_dotenv()
    logger.info(f"启动后台服务: http://{API_HOST}:{API_PORT} (debug={API_DEBUG})")
    app.run(host=API_HOST, port=API_PORT, debug=API_DEBUG)
