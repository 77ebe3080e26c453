"""NiceGUI interface - thin visualization layer for document chat.

Responsibilities:
    - Multi-file upload panel and uploaded file list
    - Chat transcript with markdown rendering for replies
    - Busy indicator with input disabled while a request runs

Contains minimal business logic. Delegates all operations to the API.
"""
