"""Platform-independent request normalization.

Platform parsers translate raw assistant payloads into a canonical `Request` holding ranked `Match`
objects. The dispatcher tries registered parsers in order until one of them succeeds.
"""
