"""Linux platform modules"""
