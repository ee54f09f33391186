#!/usr/bin/env python3
import uvicorn
import logging
import os
from datetime import datetime
from app.core.config import settings

# 创建logs目录（如果不存在）
log_dir = "logs"
os.makedirs(log_dir, exist_ok=True)

# 控制台输出由 app.main 的 basicConfig 负责，这里只追加按启动时间命名的日志文件
log_filename = os.path.join(log_dir, f"site_admin_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log")
file_handler = logging.FileHandler(log_filename, encoding='utf-8')
file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
root_logger = logging.getLogger()
root_logger.setLevel(settings.LOG_LEVEL.upper())
root_logger.addHandler(file_handler)

logger = logging.getLogger(__name__)


if __name__ == "__main__":
    logger.info(f"启动API服务 - 监听 {settings.HOST}:{settings.PORT}，日志文件: {log_filename}")
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.RELOAD)
