"""
股票行情仪表盘后端

模块:
- validation: 股票代码校验
- data: 错误体系、数据模型、Alpha Vantage 客户端
- services: 行情标准化与批量获取
- web: FastAPI 接口
- utils: 配置、日志等通用工具
"""

__version__ = "0.1.0"
