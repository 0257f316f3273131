"""Windows platform modules"""
