"""Pydantic models for the mock user and product records."""

from pydantic import BaseModel, Field, ConfigDict


CITIES = ("New York", "London", "Tokyo", "Paris", "Sydney")
CATEGORIES = ("Electronics", "Clothing", "Books", "Home", "Sports")


class User(BaseModel):
    """A generated user record."""

    id: int = Field(ge=1, description="Sequential user id")
    name: str = Field(description="Display name")
    email: str = Field(description="Email address")
    age: int = Field(description="Age in years")
    city: str = Field(description=f"One of: {', '.join(CITIES)}")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "User 1",
                "email": "user1@example.com",
                "age": 34,
                "city": "Tokyo"
            }
        }
    )


class Product(BaseModel):
    """A generated product record."""

    id: int = Field(ge=1, description="Sequential product id")
    name: str = Field(description="Product name")
    price: int = Field(description="Price in whole currency units")
    category: str = Field(description=f"One of: {', '.join(CATEGORIES)}")
    stock: int = Field(description="Units in stock")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "Product 1",
                "price": 420,
                "category": "Books",
                "stock": 17
            }
        }
    )
