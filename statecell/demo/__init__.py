"""
Counter demo application built on the container.
"""
