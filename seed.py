"""Hard-coded records loaded into the in-memory database at startup."""

import logging
from datetime import date

from sqlmodel import Session

from models import AdminUser, Donation, HelpRequest, Story
from routers.auth import ADMIN_EMAIL, ADMIN_NAME, ADMIN_PASSWORD, hash_password

logger = logging.getLogger(__name__)


SEED_REQUESTS = [
    {
        "full_name": "Aisha Bello",
        "email": "aisha.b@email.com",
        "phone": "+234 801 234 5678",
        "address": "Lagos, Nigeria",
        "age": "28",
        "gender": "Female",
        "ailment_type": "Heart Surgery",
        "description": "Need urgent heart surgery for congenital heart defect. Doctor recommended immediate intervention.",
        "treatment_progress": "Diagnosed, awaiting surgery",
        "status": "pending",
        "priority": "urgent",
        "created_at": date(2024, 1, 20),
        "assigned_to": "Dr. Emeka Okonkwo",
        "notes": "Patient needs immediate attention. Surgery scheduled for next week.",
    },
    {
        "full_name": "Emeka Okafor",
        "email": "emeka.o@email.com",
        "phone": "+234 802 345 6789",
        "address": "Enugu, Nigeria",
        "age": "35",
        "gender": "Male",
        "ailment_type": "Diabetes Management",
        "description": "Struggling with diabetes management. Need help with medication and monitoring supplies.",
        "treatment_progress": "On medication, needs monitoring",
        "status": "reviewing",
        "priority": "medium",
        "created_at": date(2024, 1, 19),
        "assigned_to": "Dr. Fatima Hassan",
    },
    {
        "full_name": "Fatima Hassan",
        "email": "fatima.h@email.com",
        "phone": "+234 803 456 7890",
        "address": "Kano, Nigeria",
        "age": "22",
        "gender": "Female",
        "ailment_type": "Emergency Appendectomy",
        "description": "Severe abdominal pain, diagnosed with appendicitis. Need emergency surgery.",
        "treatment_progress": "Emergency room visit, surgery needed",
        "status": "approved",
        "priority": "high",
        "created_at": date(2024, 1, 18),
        "assigned_to": "Dr. Chukwudi Okonkwo",
        "notes": "Surgery approved and scheduled for tomorrow.",
    },
    {
        "full_name": "Chukwudi Okonkwo",
        "email": "chukwudi.o@email.com",
        "phone": "+234 804 567 8901",
        "address": "Abuja, Nigeria",
        "age": "45",
        "gender": "Male",
        "ailment_type": "Cancer Treatment",
        "description": "Diagnosed with early-stage cancer. Need chemotherapy treatment and support.",
        "treatment_progress": "Diagnosed, treatment plan needed",
        "status": "pending",
        "priority": "high",
        "created_at": date(2024, 1, 17),
    },
    {
        "full_name": "Hauwa Yusuf",
        "email": "hauwa.y@email.com",
        "phone": "+234 805 678 9012",
        "address": "Kaduna, Nigeria",
        "age": "26",
        "gender": "Female",
        "ailment_type": "Maternity Care",
        "description": "Pregnant with twins, high-risk pregnancy. Need specialized maternity care.",
        "treatment_progress": "Regular checkups, monitoring needed",
        "status": "reviewing",
        "priority": "medium",
        "created_at": date(2024, 1, 16),
        "assigned_to": "Dr. Kemi Adebayo",
    },
    {
        "full_name": "Kemi Adebayo",
        "email": "kemi.a@email.com",
        "phone": "+234 806 789 0123",
        "address": "Ibadan, Nigeria",
        "age": "31",
        "gender": "Female",
        "ailment_type": "Orthopedic Surgery",
        "description": "Severe knee injury from accident. Need reconstructive surgery and rehabilitation.",
        "treatment_progress": "Initial treatment completed, surgery needed",
        "status": "approved",
        "priority": "medium",
        "created_at": date(2024, 1, 15),
        "assigned_to": "Dr. Aisha Bello",
        "notes": "Surgery approved. Patient will need 6 months rehabilitation.",
    },
]

SEED_DONATIONS = [
    {
        "donor_name": "Adebayo Johnson",
        "email": "adebayo.j@email.com",
        "amount": 50000,
        "message": "Keep up the great work helping Nigerians!",
        "status": "completed",
        "payment_method": "Bank Transfer",
        "created_at": date(2024, 1, 20),
        "transaction_id": "TXN-001-2024",
    },
    {
        "donor_name": "Chioma Okonkwo",
        "email": "chioma.o@email.com",
        "amount": 25000,
        "message": "Every little bit helps. God bless you all.",
        "status": "completed",
        "payment_method": "Credit Card",
        "created_at": date(2024, 1, 19),
        "transaction_id": "TXN-002-2024",
    },
    {
        "donor_name": "Emeka Eze",
        "email": "emeka.e@email.com",
        "amount": 100000,
        "status": "completed",
        "payment_method": "Mobile Money",
        "created_at": date(2024, 1, 18),
        "transaction_id": "TXN-003-2024",
    },
    {
        "donor_name": "Fatima Bello",
        "email": "fatima.b@email.com",
        "amount": 75000,
        "message": "Supporting healthcare for all Nigerians.",
        "status": "pending",
        "payment_method": "Bank Transfer",
        "created_at": date(2024, 1, 17),
        "transaction_id": "TXN-004-2024",
    },
    {
        "donor_name": "Kemi Adebayo",
        "email": "kemi.a@email.com",
        "amount": 150000,
        "status": "completed",
        "payment_method": "Credit Card",
        "created_at": date(2024, 1, 16),
        "transaction_id": "TXN-005-2024",
    },
    {
        "donor_name": "Hassan Yusuf",
        "email": "hassan.y@email.com",
        "amount": 30000,
        "status": "failed",
        "payment_method": "Mobile Money",
        "created_at": date(2024, 1, 15),
        "transaction_id": "TXN-006-2024",
    },
]

_UNSPLASH = "https://images.unsplash.com/{}?w=400&h=300&fit=crop&crop=face"

SEED_STORIES = [
    {
        "name": "Aisha Bello",
        "story": "Aisha received life-saving heart surgery through our medical assistance program. Her recovery has been remarkable.",
        "before_image": _UNSPLASH.format("photo-1559757148-5c350d0d3c56"),
        "after_image": _UNSPLASH.format("photo-1573496359142-b8d87734a5a2"),
        "category": "surgery",
        "status": "published",
        "created_at": date(2024, 1, 15),
    },
    {
        "name": "Emeka Okafor",
        "story": "Emeka's diabetes treatment was fully funded, allowing him to manage his condition and return to work.",
        "before_image": _UNSPLASH.format("photo-1507003211169-0a1dd7228f2d"),
        "after_image": _UNSPLASH.format("photo-1500648767791-00dcc994a43e"),
        "category": "chronic-conditions",
        "status": "published",
        "created_at": date(2024, 1, 10),
    },
    {
        "name": "Fatima Hassan",
        "story": "Fatima's emergency appendectomy was completed successfully, and she's now back to her studies.",
        "before_image": _UNSPLASH.format("photo-1494790108755-2616b612b786"),
        "after_image": _UNSPLASH.format("photo-1438761681033-6461ffad8d80"),
        "category": "emergency",
        "status": "draft",
        "created_at": date(2024, 1, 8),
    },
    {
        "name": "Chukwudi Okonkwo",
        "story": "Chukwudi's cancer treatment was fully supported, giving him hope for a brighter future.",
        "before_image": _UNSPLASH.format("photo-1507003211169-0a1dd7228f2d"),
        "after_image": _UNSPLASH.format("photo-1500648767791-00dcc994a43e"),
        "category": "cancer",
        "status": "published",
        "created_at": date(2024, 1, 6),
    },
    {
        "name": "Hauwa Yusuf",
        "story": "Hauwa's maternity care was ensured, resulting in a healthy baby and mother.",
        "before_image": _UNSPLASH.format("photo-1559757148-5c350d0d3c56"),
        "after_image": _UNSPLASH.format("photo-1573496359142-b8d87734a5a2"),
        "category": "maternity",
        "status": "published",
        "created_at": date(2024, 1, 4),
    },
    {
        "name": "Kemi Adebayo",
        "story": "Kemi's orthopedic surgery restored her mobility and independence.",
        "before_image": _UNSPLASH.format("photo-1494790108755-2616b612b786"),
        "after_image": _UNSPLASH.format("photo-1438761681033-6461ffad8d80"),
        "category": "surgery",
        "status": "published",
        "created_at": date(2024, 1, 2),
    },
]


def seed_database(session: Session) -> None:
    """Insert the admin account and the sample requests, donations and stories."""
    session.add(
        AdminUser(
            email=ADMIN_EMAIL,
            name=ADMIN_NAME,
            password_hash=hash_password(ADMIN_PASSWORD),
        )
    )
    for row in SEED_REQUESTS:
        session.add(HelpRequest(**row))
    for row in SEED_DONATIONS:
        session.add(Donation(**row))
    for row in SEED_STORIES:
        session.add(Story(**row))
    session.commit()

    logger.info(
        "Seeded %d requests, %d donations, %d stories",
        len(SEED_REQUESTS),
        len(SEED_DONATIONS),
        len(SEED_STORIES),
    )
