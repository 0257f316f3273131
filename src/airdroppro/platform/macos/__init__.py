"""macOS platform modules"""
