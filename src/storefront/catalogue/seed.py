"""Demo catalogue used by local sessions and tests."""

from storefront.catalogue.product import Product

DEFAULT_PRODUCTS = [
    {
        "id": "1",
        "name": "iPhone 15 Pro",
        "price": 8999.99,
        "description": "O mais avançado iPhone com chip A17 Pro",
        "image_url": "https://via.placeholder.com/300x300/007AFF/FFFFFF?text=iPhone+15+Pro",
        "category": "electronics",
        "stock": 50,
        "rating": 4.8,
        "reviews": 1250,
    },
    {
        "id": "2",
        "name": "MacBook Air M2",
        "price": 12999.99,
        "description": "Notebook ultrafino com chip M2",
        "image_url": "https://via.placeholder.com/300x300/34C759/FFFFFF?text=MacBook+Air",
        "category": "electronics",
        "stock": 25,
        "rating": 4.9,
        "reviews": 890,
    },
    {
        "id": "3",
        "name": "Camiseta Nike Dri-FIT",
        "price": 89.99,
        "description": "Camiseta esportiva com tecnologia Dri-FIT",
        "image_url": "https://via.placeholder.com/300x300/FF3B30/FFFFFF?text=Nike+Dri-FIT",
        "category": "clothing",
        "stock": 100,
        "rating": 4.5,
        "reviews": 320,
    },
    {
        "id": "4",
        "name": "Tênis Adidas Ultraboost",
        "price": 299.99,
        "description": "Tênis de corrida com tecnologia Boost",
        "image_url": "https://via.placeholder.com/300x300/FF9500/FFFFFF?text=Ultraboost",
        "category": "sports",
        "stock": 75,
        "rating": 4.7,
        "reviews": 540,
    },
    {
        "id": "5",
        "name": "Sofá Moderno 3 Lugares",
        "price": 1899.99,
        "description": "Sofá contemporâneo em couro sintético premium",
        "image_url": "https://via.placeholder.com/300x300/8E4EC6/FFFFFF?text=Sofa+Moderno",
        "category": "home",
        "stock": 15,
        "rating": 4.6,
        "reviews": 180,
    },
    {
        "id": "6",
        "name": "AirPods Pro 2ª Geração",
        "price": 1999.99,
        "description": "Fones sem fio com cancelamento ativo de ruído",
        "image_url": "https://via.placeholder.com/300x300/007AFF/FFFFFF?text=AirPods+Pro",
        "category": "electronics",
        "stock": 60,
        "rating": 4.8,
        "reviews": 720,
    },
]


def default_products() -> list[Product]:
    """Build fresh Product aggregates for the demo catalogue."""
    return [Product(**data) for data in DEFAULT_PRODUCTS]
