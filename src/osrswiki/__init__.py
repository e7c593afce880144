# ABOUTME: Core data and service logic for the Old School RuneScape wiki reader
# ABOUTME: Search and feed pipelines over the MediaWiki API plus the offline map tile store

__version__ = "0.1.0"
