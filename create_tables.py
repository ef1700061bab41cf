# create_tables.py
"""
Database table creation script for GinyWow
Run once on deployment before starting the web workers.
"""

import sys
import traceback
from sqlalchemy import text, inspect
from ginywow import create_app, db

REQUIRED_TABLES = ['thumbnails', 'title_optimizations', 'newsletter_subscriptions', 'short_urls']


def create_all_tables():
    """Create all database tables with proper error handling"""
    print("=" * 60)
    print("GINYWOW DATABASE INITIALIZATION")
    print("=" * 60)

    try:
        app = create_app()

        with app.app_context():
            print("\n1. Checking database connection...")
            db.session.execute(text('SELECT 1'))
            print("   ✓ Database connection successful")

            print("\n2. Creating database tables...")
            from ginywow import models  # registers every model with SQLAlchemy
            db.create_all()
            print("   ✓ Database tables created successfully")

            print("\n3. Verifying tables...")
            tables = inspect(db.engine).get_table_names()
            missing_tables = [t for t in REQUIRED_TABLES if t not in tables]

            if missing_tables:
                print(f"   ✗ Missing tables: {missing_tables}")
                print(f"   Available tables: {', '.join(sorted(tables))}")
                raise RuntimeError(f"Required tables not created: {missing_tables}")

            print(f"   ✓ All required tables verified ({len(tables)} total)")
            print(f"   Tables: {', '.join(sorted(tables))}")

            print("\n" + "=" * 60)
            print("DATABASE INITIALIZATION COMPLETE!")
            print("=" * 60)
            return True

    except Exception as e:
        print("\n" + "=" * 60)
        print("DATABASE INITIALIZATION FAILED!")
        print("=" * 60)
        print(f"\nError Type: {type(e).__name__}")
        print(f"Error Message: {e}")
        print("\nFull Traceback:")
        print("-" * 40)
        traceback.print_exc()
        print("-" * 40)
        return False


if __name__ == "__main__":
    if not create_all_tables():
        print("\n⚠️  Build will fail due to database initialization error")
        sys.exit(1)
    print("\n✅ Database is ready for application deployment")
    sys.exit(0)
