"""Application layer: DTOs and the storage service"""
