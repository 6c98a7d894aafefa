"""Weka-style algorithm trees to OpenML-style flows and back"""
