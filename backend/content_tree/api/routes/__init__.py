"""
API路由模块
"""
