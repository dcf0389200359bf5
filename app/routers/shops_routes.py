# app/routers/shops_routes.py

import math
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlmodel import Session, select

from app.auth import require_barber
from app.core import distance_km
from app.db import get_session
from app.ledger import delete_shop, get_shop
from app.models import MAX_ID, Shop
from app.schemas import ShopCreate, ShopPublic, ShopRemoved, ShopWithDistance

router = APIRouter(
    tags=["shops"],
)


@router.get("/barbers", response_model=List[ShopPublic])
@router.get("/shops", response_model=List[ShopPublic])
def list_shops(session: Session = Depends(get_session)):
    return session.exec(select(Shop).order_by(Shop.id)).all()


@router.get("/barbers/near", response_model=List[ShopWithDistance])
def list_shops_near(
    lat: Optional[float] = Query(default=None),
    lng: Optional[float] = Query(default=None),
    session: Session = Depends(get_session),
):
    if lat is None or lng is None:
        raise HTTPException(status_code=400, detail="Query parameters 'lat' and 'lng' are required")
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise HTTPException(status_code=400, detail="Invalid 'lat' or 'lng'")

    shops = session.exec(
        select(Shop)
        .where(Shop.lat.is_not(None))
        .where(Shop.lng.is_not(None))
        .order_by(Shop.id)
    ).all()

    with_distance = [
        ShopWithDistance(
            **ShopPublic.model_validate(s).model_dump(),
            distance_km=distance_km(lat, lng, s.lat, s.lng),
        )
        for s in shops
    ]
    # sort is stable, so equal distances keep id order
    with_distance.sort(key=lambda s: s.distance_km)
    return with_distance


@router.get("/barbers/{shop_id}", response_model=ShopPublic)
def get_shop_detail(shop_id: int = Path(ge=1, le=MAX_ID), session: Session = Depends(get_session)):
    return get_shop(session, shop_id)


@router.post("/shops", response_model=ShopPublic, status_code=201, dependencies=[Depends(require_barber)])
def create_shop(shop: ShopCreate, session: Session = Depends(get_session)):
    db_shop = Shop(**shop.model_dump())
    session.add(db_shop)
    session.commit()
    session.refresh(db_shop)
    return db_shop


@router.delete("/shops/{shop_id}", response_model=ShopRemoved, dependencies=[Depends(require_barber)])
def remove_shop(shop_id: int = Path(ge=1, le=MAX_ID), session: Session = Depends(get_session)):
    delete_shop(session, shop_id)
    return {"removed": shop_id}
