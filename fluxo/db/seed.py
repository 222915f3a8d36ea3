"""
Built-in records present before anything is created.
"""
from urllib.parse import quote
from fluxo.core.roles import RoleEnum
from fluxo.schemas import EventOut, UserProfile

SUPER_ADMIN_UID = "super_admin"


def avatar_url(name: str) -> str:
    """Generated initials avatar for a display name."""
    return f"https://ui-avatars.com/api/?name={quote(name, safe='')}"


SUPER_ADMIN_PROFILE = UserProfile(
    uid=SUPER_ADMIN_UID,
    name="Platform Admin",
    role=RoleEnum.SUPER_ADMIN,
    avatar=avatar_url("Admin"),
    blocked=False,
)

SEED_EVENTS = [
    EventOut(
        id="evt_01",
        title="Tech Summit 2024",
        date="Oct 25, 2024",
        time="10:00 AM - 4:00 PM",
        location="Main Auditorium, Innovation Block",
        description=(
            "Join us for the biggest tech gathering of the year. Featuring speakers "
            "from Google, Microsoft, and leading startups. Topics include AI, "
            "Blockchain, and Future of Work."
        ),
        image_url="https://images.unsplash.com/photo-1540575467063-178a50c2df87?auto=format&fit=crop&w=1000&q=80",
        registration_link="https://docs.google.com/forms",
        map_embed_url="https://www.google.com/maps/embed?pb=!1m18!1m12!1m3!1d3501.7615367683!2d77.2273!3d28.6369",
    ),
    EventOut(
        id="evt_02",
        title="Hackathon: Code for Good",
        date="Nov 12, 2024",
        time="9:00 AM (24 Hours)",
        location="CS Dept Labs",
        description=(
            "A 24-hour coding marathon to solve real-world problems. Great prizes "
            "and internship opportunities for winners."
        ),
        image_url="https://images.unsplash.com/photo-1504384308090-c54be3855833?auto=format&fit=crop&w=1000&q=80",
        registration_link="https://docs.google.com/forms",
    ),
    EventOut(
        id="evt_03",
        title="Startup Pitch Night",
        date="Nov 20, 2024",
        time="6:00 PM - 8:00 PM",
        location="Incubation Center",
        description=(
            "Watch 10 selected startups pitch to VCs and Angel Investors. "
            "Networking dinner to follow."
        ),
        image_url="https://images.unsplash.com/photo-1559223607-a43c990ed9bb?auto=format&fit=crop&w=1000&q=80",
        registration_link="https://docs.google.com/forms",
    ),
]
