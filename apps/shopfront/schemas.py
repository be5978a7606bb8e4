"""Pydantic view-models handed to rendering targets and returned by the API."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class MediaItem(BaseModel):
    url: str
    is_video: bool = False
    active: bool = False


class ProductCard(BaseModel):
    id: str
    title: str
    main_media: MediaItem
    media_count: int = 0
    price: Optional[Decimal] = None
    sale_price: Optional[Decimal] = None
    price_label: Optional[str] = None
    sale_price_label: Optional[str] = None
    on_sale: bool = False
    discount_badge: Optional[str] = None
    is_featured: bool = False
    categories: List[str] = Field(default_factory=list)


class ProductDetail(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    price: Optional[Decimal] = None
    sale_price: Optional[Decimal] = None
    price_label: Optional[str] = None
    sale_price_label: Optional[str] = None
    on_sale: bool = False
    discount_badge: Optional[str] = None
    promotion_ends: Optional[date] = None
    categories: List[str] = Field(default_factory=list)
    admin_note: Optional[str] = None
    media: List[MediaItem] = Field(default_factory=list)
    active_media_index: int = 0
    active_media: MediaItem


class CategoryCount(BaseModel):
    name: str
    count: int
    selected: bool = False


class CatalogSections(BaseModel):
    # None means the section is suppressed
    recent: Optional[List[ProductCard]] = None
    featured: Optional[List[ProductCard]] = None
    promotions: Optional[List[ProductCard]] = None


class SelectionState(BaseModel):
    open_product_id: Optional[str] = None
    active_media_index: int = 0


class CatalogView(BaseModel):
    products: List[ProductCard] = Field(default_factory=list)
    product_count: int = 0
    product_count_label: str = "0 products"
    search_text: str = ""
    selected_categories: List[str] = Field(default_factory=list)
    category_filter: str = ""
    categories: List[CategoryCount] = Field(default_factory=list)
    sections: CatalogSections = Field(default_factory=CatalogSections)
    selection: SelectionState = Field(default_factory=SelectionState)
    detail: Optional[ProductDetail] = None
    loading: bool = False
    load_error: Optional[str] = None


class SearchUpdate(BaseModel):
    text: str = ""
    immediate: bool = False


class CategoryToggle(BaseModel):
    name: str
    selected: Optional[bool] = None


class CategoryFilter(BaseModel):
    text: str = ""
