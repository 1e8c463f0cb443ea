"""
Core
設定・例外・ログ
"""
