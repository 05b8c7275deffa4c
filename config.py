"""
Configuration module for cake.
Loads settings from environment variables or .env file.
cake 配置模块。
从环境变量或 .env 文件加载所有配置项。
"""

import os
from dotenv import load_dotenv

load_dotenv()  # 自动读取当前目录的 .env 文件（若存在），优先级低于系统环境变量

# --- Input ---
# --- 输入文件 ---
CAKEFILE = os.getenv("CAKEFILE", "Cakefile")  # 默认构建描述文件（相对于当前工作目录）

# --- Execution ---
# --- 执行参数 ---
CAKE_SHELL = os.getenv("CAKE_SHELL", "/bin/sh")                                   # 以 `<shell> -c <command>` 方式执行每条命令
CAKE_ECHO_COMMANDS = os.getenv("CAKE_ECHO_COMMANDS", "true").lower() == "true"   # 执行前是否回显 `@<command>`

# --- Ordering ---
# --- 拓扑排序 ---
# false = 与参考实现一致，环路被静默截断；true = 检测到环路时报错
CAKE_DETECT_CYCLES = os.getenv("CAKE_DETECT_CYCLES", "false").lower() == "true"
