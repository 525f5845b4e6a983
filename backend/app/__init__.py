"""
SmartExam backend application.
"""
