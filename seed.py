"""
Script para popular o banco de dados com uma adega padrão e garrafas de exemplo:
- Adega "EuroCave Pure L": 6 prateleiras × 10 colunas × 2 profundidades = 120 slots
- Algumas garrafas Cellared, parte delas já alocadas
"""
from sqlalchemy.orm import Session
from models.database import SessionLocal, engine, Base, HOUSEHOLD_ID, init_db
from models.fridge_layout import FridgeLayout
from models.wine import Wine, WineStatus
from models.cellar_slot import CellarSlot
from services.codecs import Depth

SAMPLE_WINES = [
    # (producer, wine_name, vintage, region, country_code, slot)
    ("Ridge", "Monte Bello", 2016, "Santa Cruz Mountains", "US", (1, 1, Depth.FRONT)),
    ("Turley", "Ueberroth Zinfandel", 2018, "Paso Robles", "US", (1, 2, Depth.FRONT)),
    ("Château Musar", "Rouge", 2012, "Bekaa Valley", "LB", (2, 3, Depth.BACK)),
    ("Domaine Tempier", "Bandol Rouge", 2019, "Provence", "FR", None),
    ("Produttori del Barbaresco", "Barbaresco", 2017, "Piedmont", "IT", None),
]


def seed_database():
    """Popula o banco com a adega padrão e garrafas de exemplo"""
    init_db()

    db: Session = SessionLocal()
    try:
        # Verificar se já existe dados
        if db.query(FridgeLayout).count() > 0:
            print("Banco já possui dados. Use --force para recriar.")
            return

        layout = FridgeLayout(
            household_id=HOUSEHOLD_ID,
            name="EuroCave Pure L",
            shelves=6,
            columns=10
        )
        db.add(layout)
        db.flush()  # Para obter o ID da adega

        placed = 0
        for producer, wine_name, vintage, region, country_code, slot in SAMPLE_WINES:
            wine = Wine(
                household_id=HOUSEHOLD_ID,
                producer=producer,
                wine_name=wine_name,
                vintage=vintage,
                region=region,
                country_code=country_code,
                status=WineStatus.CELLARED
            )
            db.add(wine)
            db.flush()

            if slot:
                shelf, column, depth = slot
                db.add(CellarSlot(
                    household_id=HOUSEHOLD_ID,
                    wine=wine,
                    fridge=layout,
                    shelf=shelf,
                    column_position=column,
                    depth=depth
                ))
                placed += 1

        db.commit()
        total_slots = layout.shelves * layout.columns * 2
        print("✅ Seed concluído!")
        print(f"   - adega '{layout.name}' com {total_slots} slots")
        print(f"   - {len(SAMPLE_WINES)} vinhos criados")
        print(f"   - {placed} vinhos alocados")

    except Exception as e:
        db.rollback()
        print(f"❌ Erro ao fazer seed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    import sys
    if "--force" in sys.argv:
        # Deletar tudo e recriar
        Base.metadata.drop_all(bind=engine)
        init_db()
        print("⚠️  Banco recriado do zero")

    seed_database()
