"""日报 HTML 模板与样式 (随包安装)"""
