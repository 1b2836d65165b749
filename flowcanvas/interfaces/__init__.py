"""接口层"""
