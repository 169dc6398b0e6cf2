"""Metric models, naming and registries"""
