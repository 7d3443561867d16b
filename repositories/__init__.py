"""Repositórios de pedidos."""
