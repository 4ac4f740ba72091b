"""
Service Layer Module

Resources and data sources of the provider, grouped by Azure service.
"""
