from .document_store import DocumentStore, InMemoryDocumentStore, JobStore, SqliteDocumentStore

__all__ = ["DocumentStore", "InMemoryDocumentStore", "JobStore", "SqliteDocumentStore"]
