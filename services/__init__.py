"""Serviços de cardápio, carrinho, pedido e métricas."""
