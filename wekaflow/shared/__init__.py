"""Algorithm model shared by the flow bridge"""
