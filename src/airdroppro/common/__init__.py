"""Shared building blocks for the transfer service"""
