"""User-facing failure messages (pt-BR, as shown by the storefront clients)."""

from protean.exceptions import InvalidDataError, ValidationError

# Validation
INVALID_QUANTITY = "Quantidade deve ser maior que zero"
INSUFFICIENT_STOCK = "Estoque insuficiente. Disponível: {available}"
PRODUCT_UNAVAILABLE = "Produto indisponível"

# Not found
PRODUCT_NOT_FOUND = "Produto não encontrado"
CART_ITEM_NOT_FOUND = "Produto não está no carrinho"
ORDER_NOT_FOUND = "Pedido não encontrado"

# State conflicts
EMPTY_CART = "Carrinho vazio"
ORDER_ALREADY_SHIPPED = "Não é possível cancelar pedido já enviado"
UNKNOWN_ORDER_STATUS = "Status de pedido inválido: {status}"

# Infrastructure fallbacks, one per view-model operation
LOAD_PRODUCTS_FAILED = "Erro ao carregar produtos"
SEARCH_PRODUCTS_FAILED = "Erro na busca de produtos"
LOAD_PRODUCT_FAILED = "Erro ao carregar produto"
ADD_TO_CART_FAILED = "Erro ao adicionar produto ao carrinho"
REMOVE_FROM_CART_FAILED = "Erro ao remover produto do carrinho"
UPDATE_QUANTITY_FAILED = "Erro ao atualizar quantidade"
LOAD_CART_FAILED = "Erro ao carregar carrinho"
CREATE_ORDER_FAILED = "Erro ao criar pedido"
LOAD_ORDERS_FAILED = "Erro ao carregar pedidos"
LOAD_ORDER_FAILED = "Erro ao carregar pedido"
UPDATE_ORDER_STATUS_FAILED = "Erro ao atualizar status do pedido"


def first_message(exc: ValidationError | InvalidDataError) -> str:
    """Return the first human-readable message carried by a ValidationError or InvalidDataError."""
    messages = exc.messages
    if isinstance(messages, dict):
        for field_messages in messages.values():
            if isinstance(field_messages, list | tuple):
                if field_messages:
                    return str(field_messages[0])
            elif field_messages:
                return str(field_messages)
    return str(exc)
