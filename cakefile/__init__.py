"""
Cakefile module - turns a Cakefile on disk into a TargetGraph.
Cakefile 模块 —— 将磁盘上的 Cakefile 转换为 TargetGraph。

Components:
  - reader.py: Line Reader (file -> list of lines)
  - parser.py: Target Graph Parser (lines -> TargetGraph)

模块组成：
  - reader.py: 行读取器（文件 -> 行列表）
  - parser.py: 目标图解析器（行列表 -> TargetGraph）
"""

from cakefile.reader import read_lines                          # 行读取
from cakefile.parser import parse_cakefile, parse_lines         # 解析为目标图
