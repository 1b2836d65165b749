"""REST API 数据契约"""
