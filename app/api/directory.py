"""
CRUD endpoints for customers, stylists and services
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.api.schemas import (
    CustomerRequest,
    CustomerResponse,
    ServiceRequest,
    ServiceResponse,
    StylistRequest,
    StylistResponse,
)
from app.database import Base, get_db
from app.models import Customer, Service, Stylist

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_or_404(db: Session, model: type[Base], entity_id: int):
    entity = db.get(model, entity_id)
    if entity is None:
        raise HTTPException(status_code=404, detail=f"{model.__name__} not found")
    return entity


def _create(db: Session, entity, request: Request, response: Response, route_name: str, param: str):
    db.add(entity)
    db.commit()
    db.refresh(entity)
    response.headers["Location"] = str(request.url_for(route_name, **{param: entity.id}))
    return entity


def _delete(db: Session, model: type[Base], entity_id: int) -> Response:
    entity = _get_or_404(db, model, entity_id)
    db.delete(entity)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Refused to delete %s %s: still referenced by bookings", model.__name__, entity_id)
        raise HTTPException(
            status_code=409,
            detail=f"{model.__name__} {entity_id} is still referenced by bookings",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# CUSTOMERS
# ============================================================================


@router.get("/customers", response_model=list[CustomerResponse], tags=["customers"])
def get_customers(db: Session = Depends(get_db)):
    return db.query(Customer).order_by(Customer.id).all()


@router.get("/customers/{customer_id}", response_model=CustomerResponse, tags=["customers"])
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, Customer, customer_id)


@router.post(
    "/customers",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["customers"],
)
def create_customer(payload: CustomerRequest, request: Request, response: Response, db: Session = Depends(get_db)):
    customer = Customer(full_name=payload.fullName, email=payload.email)
    return _create(db, customer, request, response, "get_customer", "customer_id")


@router.put("/customers/{customer_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["customers"])
def update_customer(customer_id: int, payload: CustomerRequest, db: Session = Depends(get_db)):
    customer = _get_or_404(db, Customer, customer_id)
    customer.full_name = payload.fullName
    customer.email = payload.email
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/customers/{customer_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["customers"])
def delete_customer(customer_id: int, db: Session = Depends(get_db)):
    return _delete(db, Customer, customer_id)


# ============================================================================
# STYLISTS
# ============================================================================


@router.get("/stylists", response_model=list[StylistResponse], tags=["stylists"])
def get_stylists(db: Session = Depends(get_db)):
    return db.query(Stylist).order_by(Stylist.id).all()


@router.get("/stylists/{stylist_id}", response_model=StylistResponse, tags=["stylists"])
def get_stylist(stylist_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, Stylist, stylist_id)


@router.post(
    "/stylists",
    response_model=StylistResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["stylists"],
)
def create_stylist(payload: StylistRequest, request: Request, response: Response, db: Session = Depends(get_db)):
    stylist = Stylist(name=payload.name, specialty=payload.specialty)
    return _create(db, stylist, request, response, "get_stylist", "stylist_id")


@router.put("/stylists/{stylist_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["stylists"])
def update_stylist(stylist_id: int, payload: StylistRequest, db: Session = Depends(get_db)):
    stylist = _get_or_404(db, Stylist, stylist_id)
    stylist.name = payload.name
    stylist.specialty = payload.specialty
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/stylists/{stylist_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["stylists"])
def delete_stylist(stylist_id: int, db: Session = Depends(get_db)):
    return _delete(db, Stylist, stylist_id)


# ============================================================================
# SERVICES
# ============================================================================


@router.get("/services", response_model=list[ServiceResponse], tags=["services"])
def get_services(db: Session = Depends(get_db)):
    return db.query(Service).order_by(Service.id).all()


@router.get("/services/{service_id}", response_model=ServiceResponse, tags=["services"])
def get_service(service_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, Service, service_id)


@router.post(
    "/services",
    response_model=ServiceResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["services"],
)
def create_service(payload: ServiceRequest, request: Request, response: Response, db: Session = Depends(get_db)):
    service = Service(name=payload.name, price=payload.price)
    return _create(db, service, request, response, "get_service", "service_id")


@router.put("/services/{service_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["services"])
def update_service(service_id: int, payload: ServiceRequest, db: Session = Depends(get_db)):
    service = _get_or_404(db, Service, service_id)
    service.name = payload.name
    service.price = payload.price
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/services/{service_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["services"])
def delete_service(service_id: int, db: Session = Depends(get_db)):
    return _delete(db, Service, service_id)
