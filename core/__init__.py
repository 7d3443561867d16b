"""Configuração e utilitários compartilhados."""
