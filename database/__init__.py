"""Conexão SQLAlchemy e criação de tabelas."""
