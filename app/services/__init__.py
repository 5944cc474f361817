"""
Services module - store access, AI gateway and chat relay.
"""
