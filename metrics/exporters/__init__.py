"""Metric output formats"""
