"""Pydantic schemas for the HTTP interface."""
from pydantic import BaseModel


class InvoiceResponse(BaseModel):
    invoice: str


class ErrorResponse(BaseModel):
    error: str
