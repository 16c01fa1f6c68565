"""Service layer for the metadata pipeline and queries"""
