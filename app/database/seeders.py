# app/database/seeders.py
#
# Uso: python -m app.database.seeders

import random
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from app.core import settings, logger, hash_password
from app.database import SessionLocal, init_db
from app.models import User, Vehicle, TelemetryLog

LOGS_PER_VEHICLE = 15

SAMPLE_VEHICLES = [
    ("Fleet Car 1", "B1234ABC", "Toyota Avanza", "ACTIVE"),
    ("Fleet Car 2", "D5678DEF", "Honda Jazz", "INACTIVE"),
    ("Service Truck", "F9999TRK", "Isuzu Panther", "MAINTENANCE"),
    ("Garbage Truck 1", "B1111TRK", "Hino Dutro", "ACTIVE"),
    ("Garbage Truck 2", "B2222TRK", "Mitsubishi Fuso", "INACTIVE"),
    ("Pickup 1", "B3333PU", "Suzuki Carry", "ACTIVE"),
    ("Pickup 2", "B4444PU", "Daihatsu Gran Max", "MAINTENANCE"),
    ("Dump Truck", "B5555DT", "Toyota Dyna", "ACTIVE"),
    ("Sweeper", "B6666SWP", "FAUN Viajet", "INACTIVE"),
    ("Water Tanker", "B7777WT", "Isuzu Giga", "MAINTENANCE"),
]


def seed_admin(db: Session) -> User:
    admin = db.query(User).filter(User.user_email == settings.ADMIN_EMAIL).first()
    if admin:
        if admin.user_role != "ADMIN":
            # El email ya era de un USER: se promueve en lugar de duplicarlo
            admin.user_role = "ADMIN"
            db.commit()
            db.refresh(admin)
            logger.warning(f"⚠️ Usuario {settings.ADMIN_EMAIL} promovido a ADMIN.")
        else:
            logger.info("ℹ️ El usuario admin ya existe.")
        return admin

    admin = User(
        user_email=settings.ADMIN_EMAIL,
        user_password=hash_password(settings.ADMIN_PASSWORD),
        user_role="ADMIN",
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info(f"✅ Usuario admin creado: {settings.ADMIN_EMAIL}")
    return admin


def seed_vehicles(db: Session, owner: User) -> int:
    created = 0
    for name, plate, model, veh_status in SAMPLE_VEHICLES:
        # Tambien cuenta los borrados lógicamente, la placa es única en la tabla
        if db.query(Vehicle).filter(Vehicle.veh_license_plate == plate).first():
            logger.info(f"ℹ️ El vehículo ya existe: {plate}")
            continue
        db.add(
            Vehicle(
                veh_user_id=owner.user_id,
                veh_name=name,
                veh_license_plate=plate,
                veh_model=model,
                veh_status=veh_status,
            )
        )
        created += 1
    db.commit()
    logger.info(f"✅ Vehículos creados: {created}")
    return created


def seed_telemetry_logs(db: Session, logs_per_vehicle: int = LOGS_PER_VEHICLE) -> int:
    """
    Genera logs de ejemplo cada ~30 minutos hacia atrás desde ahora.
    Los vehículos que ya tienen telemetría se omiten.
    """
    now = datetime.now(timezone.utc)
    created = 0

    for vehicle in db.query(Vehicle).filter(Vehicle.veh_deleted_at.is_(None)).all():
        if db.query(TelemetryLog).filter(TelemetryLog.tel_vehicle_id == vehicle.veh_id).first():
            continue

        odometer = random.randint(10_000, 60_000)
        fuel_level = random.uniform(40, 100)
        lat = -6.2 + random.uniform(-0.05, 0.05)
        lon = 106.8 + random.uniform(-0.05, 0.05)

        for i in range(logs_per_vehicle):
            minutes_ago = (logs_per_vehicle - i) * 30 + random.randint(0, 9)
            moving = vehicle.veh_status == "ACTIVE"
            speed = round(random.uniform(10, 80), 1) if moving else 0.0

            odometer += round(speed * 0.5)
            fuel_level = max(fuel_level - random.uniform(0, 2), 5)
            lat += random.uniform(-0.002, 0.002) if moving else 0
            lon += random.uniform(-0.002, 0.002) if moving else 0

            db.add(
                TelemetryLog(
                    tel_vehicle_id=vehicle.veh_id,
                    tel_timestamp=now - timedelta(minutes=minutes_ago),
                    tel_data={
                        "odometer": odometer,
                        "fuel_level": round(fuel_level, 1),
                        "speed": speed,
                        "lat": round(lat, 6),
                        "lon": round(lon, 6),
                    },
                )
            )
            created += 1

    db.commit()
    logger.info(f"✅ Logs de telemetría creados: {created}")
    return created


def run_seeders():
    init_db()
    db = SessionLocal()
    try:
        admin = seed_admin(db)
        seed_vehicles(db, admin)
        seed_telemetry_logs(db)
    except Exception as e:
        db.rollback()
        logger.error(f"❌ Error al ejecutar los seeders: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    run_seeders()
