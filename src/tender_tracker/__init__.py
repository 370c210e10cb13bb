"""Tender Tracker package.

This package is organized by feature modules (users, tenders) with a thin
Flask controller layer on top of service/repository layers.
"""
