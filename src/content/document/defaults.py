"""Seed content used when the database holds no content document yet."""

from content.document.document import (
    About,
    Dessert,
    Hero,
    ServingIdea,
    SiteContent,
    SiteSettings,
    Testimonial,
)

_WEEKDAY_HOURS = {"open": "09:00", "close": "19:00"}


def default_site_settings() -> SiteSettings:
    return SiteSettings(
        business_name="Bano's Sweet Delights",
        phone="(555) 123-4567",
        whatsapp="(555) 123-4567",
        email="hello@banossweets.com",
        address="123 Sweet Lane, Flavor Town, ST 12345",
        delivery_area="San Francisco Bay Area",
        delivery_radius="15 miles",
        delivery_info="Free delivery on orders over $50",
        advance_notice_hours=48,
        business_hours={
            "monday": _WEEKDAY_HOURS,
            "tuesday": _WEEKDAY_HOURS,
            "wednesday": _WEEKDAY_HOURS,
            "thursday": _WEEKDAY_HOURS,
            "friday": _WEEKDAY_HOURS,
            "saturday": {"open": "10:00", "close": "18:00"},
            "sunday": {"open": "12:00", "close": "17:00"},
        },
        social_media={
            "facebook": "https://facebook.com/banossweets",
            "instagram": "https://instagram.com/banossweets",
            "whatsapp": "https://wa.me/15551234567",
        },
    )


def default_catalog() -> list[Dessert]:
    """The starter catalog seeded by ``initialize``; ids are generated."""
    return [
        Dessert(
            name="Traditional Kheer",
            description=(
                "Creamy rice pudding slow-cooked with milk, aromatic cardamom, and topped with pistachios "
                "and almonds. Made with basmati rice and pure desi ghee."
            ),
            price=12.99,
            image="https://images.pexels.com/photos/31109623/pexels-photo-31109623.jpeg?auto=compress&cs=tinysrgb&w=800",
            featured=True,
            prep_time="24 hours",
            serves="4-6 people",
            category="traditional",
            is_popular=True,
            rating=4.8,
            review_count=89,
            allergens=["Dairy", "Nuts"],
            ingredients=["Basmati Rice", "Whole Milk", "Sugar", "Cardamom", "Pistachios", "Almonds", "Ghee"],
        ),
        Dessert(
            name="Festive Sheer-Khorma",
            description=(
                "Rich vermicelli pudding with dates, nuts, and aromatic spices - perfect for Eid celebrations. "
                "A traditional recipe passed down through generations."
            ),
            price=15.99,
            image="https://images.pexels.com/photos/6210745/pexels-photo-6210745.jpeg?auto=compress&cs=tinysrgb&w=800",
            featured=True,
            prep_time="48 hours",
            serves="6-8 people",
            category="seasonal",
            is_popular=True,
            rating=4.9,
            review_count=67,
            allergens=["Dairy", "Nuts"],
            ingredients=["Vermicelli", "Whole Milk", "Dates", "Almonds", "Pistachios", "Cardamom", "Rose Water"],
        ),
        Dessert(
            name="Rose Kulfi",
            description=(
                "Traditional frozen dessert infused with rose water and cardamom, garnished with pistachios. "
                "A refreshing treat for warm days."
            ),
            price=8.99,
            image="https://images.unsplash.com/photo-1570197788417-0e82375c9371?w=500&h=400&fit=crop",
            featured=False,
            prep_time="12 hours",
            serves="2-3 people",
            category="frozen",
            is_popular=False,
            rating=4.7,
            review_count=45,
            allergens=["Dairy", "Nuts"],
            ingredients=["Whole Milk", "Heavy Cream", "Sugar", "Rose Water", "Cardamom", "Pistachios"],
        ),
    ]


def default_serving_ideas() -> list[ServingIdea]:
    return [
        ServingIdea(
            title="Festival Celebrations",
            subtitle="Traditional festivities made sweeter",
            description=(
                "Perfect for Eid, Diwali, and other cultural celebrations where sweets symbolize joy and prosperity."
            ),
            image="https://images.pexels.com/photos/6210745/pexels-photo-6210745.jpeg?auto=compress&cs=tinysrgb&w=800",
            occasion="Religious",
            occasions=["Eid ul-Fitr", "Eid ul-Adha", "Diwali", "Holi", "Cultural Events"],
            icon="🎆",
            color="from-orange-400 to-red-500",
        ),
        ServingIdea(
            title="Wedding Ceremonies",
            subtitle="Sweet beginnings for new chapters",
            description=(
                "Elegant desserts that add traditional charm to wedding receptions, mehndi, and nikah ceremonies."
            ),
            image="https://images.pexels.com/photos/1702373/pexels-photo-1702373.jpeg?auto=compress&cs=tinysrgb&w=800",
            occasion="Wedding",
            occasions=["Wedding Reception", "Mehndi Ceremony", "Nikah", "Engagement", "Anniversary"],
            icon="💒",
            color="from-pink-400 to-rose-500",
        ),
    ]


def default_testimonials() -> list[Testimonial]:
    return [
        Testimonial(
            id="1",
            name="Sarah Ahmed",
            review=(
                "The kheer was absolutely divine! It reminded me of my grandmother's recipe. "
                "Chef Bano truly captures the authentic flavors."
            ),
            rating=5,
            occasion="Family dinner",
        ),
        Testimonial(
            id="2",
            name="Mohammad Khan",
            review=(
                "Ordered desserts for our Eid celebration. Everything was fresh, beautifully presented, "
                "and tasted incredible. Highly recommend!"
            ),
            rating=5,
            occasion="Eid celebration",
        ),
        Testimonial(
            id="3",
            name="Priya Sharma",
            review=(
                "The kulfi was the perfect end to our dinner party. "
                "Guests couldn't stop asking where we got such amazing desserts!"
            ),
            rating=5,
            occasion="Dinner party",
        ),
    ]


def default_content() -> SiteContent:
    """The document seeded on first load: full sections plus the starter catalog."""
    return SiteContent.seed(
        hero=Hero(
            title="Authentic South Asian Desserts",
            subtitle=(
                "Experience the rich flavors of traditional sweets crafted with love "
                "and passed down through generations"
            ),
            cta_text="Explore Our Desserts",
            background_image="https://images.unsplash.com/photo-1578985545062-69928b1d9587?w=1200&h=800&fit=crop",
        ),
        about=About(
            title="Meet Chef Bano",
            description=(
                "With over 15 years of experience in traditional South Asian cuisine, Chef Bano brings authentic "
                "flavors and time-honored techniques to every dessert."
            ),
            chef_name="Chef Bano Ahmad",
            chef_image="https://images.unsplash.com/photo-1559847844-5315695abf42?w=400&h=400&fit=crop",
            experience="15+ Years",
            certification="Certified Food Handler",
            specialties=["Traditional Kheer", "Sheer Khorma", "Kulfi", "Gulab Jamun", "Ras Malai"],
        ),
        site_settings=default_site_settings(),
        desserts=default_catalog(),
        serving_ideas=default_serving_ideas(),
        testimonials=default_testimonials(),
    )
