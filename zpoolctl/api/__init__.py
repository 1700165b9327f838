"""HTTP API for zpool management"""
