from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from planner import storage
from planner.db import get_db
from planner.schemas.customer import CustomerCreate, CustomerRead, CustomerUpdate


router = APIRouter(prefix="/api/customers", tags=["customers"])


@router.get("", response_model=list[CustomerRead])
def list_customers(db: Session = Depends(get_db)):
    return storage.list_customers(db)


@router.get("/{customer_id}", response_model=CustomerRead)
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    row = storage.get_customer(db, customer_id)
    if not row:
        raise HTTPException(status_code=404, detail="Customer not found")
    return row


@router.post("", response_model=CustomerRead, status_code=201)
def create_customer(payload: CustomerCreate, db: Session = Depends(get_db)):
    return storage.create_customer(db, payload.model_dump())


@router.put("/{customer_id}", response_model=CustomerRead)
def update_customer(customer_id: int, payload: CustomerUpdate, db: Session = Depends(get_db)):
    fields = payload.model_dump(exclude_unset=True)
    # name and rate are NOT NULL; a null in a partial update means "leave it"
    fields = {k: v for k, v in fields.items() if v is not None or k == "email"}
    row = storage.update_customer(db, customer_id, fields)
    if not row:
        raise HTTPException(status_code=404, detail="Customer not found")
    return row


@router.delete("/{customer_id}", status_code=204)
def delete_customer(customer_id: int, db: Session = Depends(get_db)):
    if not storage.delete_customer(db, customer_id):
        raise HTTPException(status_code=404, detail="Customer not found")
    return Response(status_code=204)
