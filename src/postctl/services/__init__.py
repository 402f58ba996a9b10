"""Service layer — corpus operations returning ServiceResult.

Services may import from domain, infrastructure, and config layers.
They must never raise for expected failures; errors travel in the result.
"""
