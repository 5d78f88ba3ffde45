"""Demo data loaded into a fresh ledger at startup."""

from database import InMemoryDatabase

_DAY_HOURS = [f"{h:02d}:00" for h in range(8, 23)]      # 08:00 - 22:00
_EARLY_HOURS = [f"{h:02d}:00" for h in range(7, 21)]    # 07:00 - 20:00
_LATE_HOURS = [f"{h:02d}:00" for h in range(9, 24)]     # 09:00 - 23:00

SAMPLE_TURFS = [
    {
        "id": "turf-1",
        "name": "Green Field Turf",
        "location": "123 Sport St, Cityville",
        "pricePerHour": 1500,
        "availableHours": _DAY_HOURS,
        "imageUrl": "https://www.amillan.co.uk/wp-content/uploads/2019/04/shutterstock_1097678441-scaled.jpg",
        "description": "A state-of-the-art turf perfect for football and cricket. Features floodlights for night games.",
    },
    {
        "id": "turf-2",
        "name": "Silver Golf Course",
        "location": "456 Central Ave, Townburg",
        "pricePerHour": 1200,
        "availableHours": _EARLY_HOURS,
        "imageUrl": "https://www.coghillgolf.com/images/slideshows/0087_Course4_9th_hole.jpg",
        "description": "Versatile turf suitable for various sports, with easy access and ample parking.",
    },
    {
        "id": "turf-3",
        "name": "Camp Nou Field",
        "location": "789 Stadium Rd, Metro City",
        "pricePerHour": 1800,
        "availableHours": _LATE_HOURS,
        "imageUrl": "https://thumbs.dreamstime.com/b/illuminated-stadium-night-football-field-green-grass-nighttime-view-empty-soccer-brightly-lit-stands-lush-ready-361013016.jpg",
        "description": "Premium turf with excellent facilities, ideal for professional training and matches.",
    },
    {
        "id": "turf-4",
        "name": "Green Field Turf",
        "location": "123 Sport St, Cityville",
        "pricePerHour": 1600,
        "availableHours": _DAY_HOURS,
        "imageUrl": "https://thumbs.dreamstime.com/b/indoor-cricket-stadium-newly-opened-indoor-stadium-night-time-160852405.jpg",
        "description": "A state-of-the-art turf perfect for football and cricket. Features floodlights for night games.",
    },
    {
        "id": "turf-5",
        "name": "Basketball Court",
        "location": "456 Central Ave, Townburg",
        "pricePerHour": 900,
        "availableHours": _EARLY_HOURS,
        "imageUrl": "https://images.pexels.com/photos/9739470/pexels-photo-9739470.jpeg",
        "description": "Versatile turf suitable for various sports, with easy access and ample parking.",
    },
    {
        "id": "turf-6",
        "name": "Eagletown Pool",
        "location": "789 Stadium Rd, Metro City",
        "pricePerHour": 2500,
        "availableHours": _LATE_HOURS,
        "imageUrl": "https://themagic5.com/cdn/shop/articles/Olympic_028472a0-6451-4834-bbea-bcd329488857.jpg?v=1752149414",
        "description": "Premium turf with excellent facilities, ideal for professional training and matches.",
    },
]

SAMPLE_USERS = [
    {"id": "user-1", "name": "Player One", "email": "playerone@example.com", "contactNo": "9876543210", "dob": "15/05/1995", "role": "player"},
    {"id": "admin-1", "name": "Turf Owner", "email": "admin@example.com", "contactNo": "9123456789", "dob": "10/03/1980", "role": "admin"},
]

SAMPLE_BOOKINGS = [
    {"turfId": "turf-1", "date": "2025-07-25", "timeSlot": "10:00", "userId": "user-1", "status": "confirmed", "paymentStatus": "paid"},
    {"turfId": "turf-2", "date": "2025-07-26", "timeSlot": "14:00", "userId": "user-1", "status": "pending", "paymentStatus": "unpaid"},
    {"turfId": "turf-1", "date": "2025-07-27", "timeSlot": "18:00", "userId": "user-1", "status": "confirmed", "paymentStatus": "paid"},
    {"turfId": "turf-3", "date": "2025-07-25", "timeSlot": "11:00", "userId": "admin-1", "status": "blocked", "paymentStatus": "N/A", "notes": "Maintenance"},
]

SAMPLE_REVIEWS = [
    {"turfId": "turf-1", "userId": "user-1", "rating": 4, "comment": "Great turf with excellent lighting. Could use better parking.", "date": "2025-07-20"},
    {"turfId": "turf-2", "userId": "user-1", "rating": 3, "comment": "Good for casual games, but the surface needs maintenance.", "date": "2025-07-22"},
]


def seed(db: InMemoryDatabase) -> InMemoryDatabase:
    for collection, docs in (
        ("turf", SAMPLE_TURFS),
        ("user", SAMPLE_USERS),
        ("booking", SAMPLE_BOOKINGS),
        ("review", SAMPLE_REVIEWS),
    ):
        for doc in docs:
            db.create_document(collection, doc)
    return db
