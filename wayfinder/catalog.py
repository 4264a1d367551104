"""Static campus catalog (UNIBEN Ugbowo and Ekehuan campuses).

Rows are ``(id, name, type, category, "lon, lat", description, faculty, icon)``.
"""

from .models import Coordinates, Location, SOURCE_CATALOG

CAMPUS_ROWS = [
    (1, "Main Campus (Main Gate)", "gate", "administrative", "5.609032, 6.399885", "Main entrance to UNIBEN Ugbowo Campus", "General", "GATE"),
    (2, "Uniben Sport Complex", "sports", "facility", "5.611795, 6.398232", "Football field, basketball courts, and athletic facilities", "General", "SPORTS"),
    (3, "Akin Deko Auditorium", "auditorium", "academic", "5.613737, 6.399650", "Main lecture hall for large gatherings and university events", "General", "AUDITORIUM"),
    (4, "Faculty of Sciences", "faculty", "academic", "5.615284, 6.399449", "Faculty of Physical and Life Sciences", "Sciences", "SCIENCE"),
    (5, "UniBen Faculty of Life Sciences Journals", "faculty", "academic", "5.615038, 6.399513", "Biology, microbiology, and life science departments", "Life Sciences", "BIOLOGY"),
    (6, "Physics Department", "department", "academic", "5.615548, 6.399591", "Department of Physics", "Physical Sciences", "SCIENCE"),
    (7, "Department of Optometry/Physics", "department", "academic", "5.615970, 6.399442", "Optometry and Physics departments", "Physical Sciences", "SCIENCE"),
    (8, "Department of Chemistry", "department", "academic", "5.615485, 6.398909", "Department of Chemistry", "Physical Sciences", "SCIENCE"),
    (9, "Department of Botany", "department", "academic", "5.615182, 6.398260", "Department of Botany and Plant Sciences", "Life Sciences", "BIOLOGY"),
    (10, "Bursary department, UNIBEN", "administrative", "administrative", "5.614681, 6.397492", "Financial services and student payments", "General", "ADMIN"),
    (11, "Library extension", "library", "facility", "5.616326, 6.396673", "University library extension", "General", "LIBRARY"),
    (12, "Environmental Management And Toxicology Department", "department", "academic", "5.615996, 6.397834", "Environmental management and toxicology studies", "Life Sciences", "BIOLOGY"),
    (13, "FESTUS IYAYI HALL", "hostel", "facility", "5.617712, 6.398526", "Student hostel accommodation", "General", "HOSTEL_M"),
    (14, "Professor Iyayi Hall", "hostel", "facility", "5.618784, 6.398973", "Student hostel accommodation", "General", "HOSTEL_M"),
    (15, "Hall 1 (Queen Idia Hostel)", "hostel", "facility", "5.619116, 6.396723", "Female student hostel", "General", "HOSTEL_F"),
    (16, "Hall 2 (Tinubu Female Hostel) UNIBEN", "hostel", "facility", "5.620193, 6.398508", "Female student hostel", "General", "HOSTEL_F"),
    (17, "Hall 4 Unit 2", "hostel", "facility", "5.622978, 6.397628", "Student hostel accommodation", "General", "HOSTEL_M"),
    (18, "UNIBEN Hall 4 (Akanu Ibiam) Hostel Unit 2", "hostel", "facility", "5.623666, 6.398380", "Student hostel accommodation", "General", "HOSTEL_M"),
    (19, "Keystone Hostel", "hostel", "facility", "5.624343, 6.399109", "Private student hostel", "General", "HOSTEL_M"),
    (20, "Faculty of Engineering", "faculty", "academic", "5.615267, 6.401964", "Engineering departments and workshops", "Engineering", "ENGINEERING"),
    (21, "Uniben International ICT centre", "ict center", "facility", "5.616583, 6.400991", "International ICT center and computer facilities", "General", "COMPUTER"),
    (22, "Computer Science Department, Uniben", "department", "academic", "5.617819, 6.400840", "Department of Computer Science", "Physical Sciences", "COMPUTER"),
    (23, "Department of Materials and Metallurgy Engineering, Faculty of Engineering.", "department", "academic", "5.617955, 6.401850", "Materials and Metallurgy Engineering", "Engineering", "ENGINEERING"),
    (24, "Electrical/Electronics Department", "department", "academic", "5.614495, 6.402679", "Electrical and Electronics Engineering", "Engineering", "ENGINEERING"),
    (25, "Department of Civil Engineering Laboratory", "department", "academic", "5.616217, 6.403598", "Civil Engineering labs and facilities", "Engineering", "ENGINEERING"),
    (26, "Department of Petroleum Engineering, University Of Benin", "department", "academic", "5.618157, 6.402589", "Petroleum Engineering department", "Engineering", "ENGINEERING"),
    (27, "MTN B-Net Library", "library", "facility", "5.616832, 6.396419", "MTN sponsored digital library", "General", "LIBRARY"),
    (28, "Maingate Shopping Complex Uniben", "commercial", "facility", "5.610023, 6.398362", "Shopping complex near main gate", "General", "ADMIN"),
    (29, "Faculty of Pharmacy, UNIBEN", "faculty", "academic", "5.621045, 6.394406", "Faculty of Pharmacy and Pharmaceutical Sciences", "Pharmacy", "SCIENCE"),
    (30, "Tetfund Hostel", "hostel", "facility", "5.628061, 6.399221", "Tetfund sponsored student hostel", "General", "HOSTEL_M"),
    (31, "NDDC Hostel, UNIBEN", "hostel", "facility", "5.617260, 6.395460", "NDDC sponsored student hostel", "General", "HOSTEL_M"),
    (32, "School of Basic Medical Sciences, University of Benin", "school", "academic", "5.624770, 6.394383", "Basic medical sciences education", "Medical Sciences", "HOSPITAL"),
    (33, "Department Of Medicine and Surgery", "department", "academic", "5.620982, 6.396089", "Medicine and Surgery department", "Medical Sciences", "HOSPITAL"),
    (34, "Second Campus (Ekehuan Campus)", "gate", "administrative", "5.599760, 6.332565", "Main entrance to UNIBEN Ekehuan Campus", "General", "GATE"),
    (35, "Sub Library University Of Benin", "library", "facility", "5.598768, 6.333851", "Sub library for university resources", "General", "LIBRARY"),
    (36, "Mass Comm Radio Broadcasting Studio", "department", "academic", "5.599573, 6.335596", "Mass Communication radio broadcasting studio", "Social Sciences", "ARTS"),
    (37, "Female Hostel", "hostel", "facility", "5.600639, 6.335271", "Female student hostel at Ekehuan Campus", "General", "HOSTEL_F"),
    (38, "Department of Mass Communication", "department", "academic", "5.598756, 6.335347", "Department of Mass Communication studies", "Social Sciences", "ARTS"),
    (39, "Department of Fine & Applied Art", "department", "academic", "5.602606, 6.333931", "Department of Fine and Applied Arts", "Arts", "ARTS"),
    (40, "Department of Education", "department", "academic", "5.603144, 6.333770", "Department of Education studies", "Education", "EDUCATION"),
    (41, "Department Of Fine And Applied Arts", "department", "academic", "5.601851, 6.333900", "Department of Fine and Applied Arts", "Arts", "ARTS"),
    (42, "Uniben Ekehuan Campus Girl's Hostel", "hostel", "facility", "5.600493, 6.334611", "Girls hostel at Ekehuan Campus", "General", "HOSTEL_F"),
    (43, "Petroleum Engineering Building", "department", "academic", "5.601181, 6.334866", "Petroleum Engineering department building", "Engineering", "ENGINEERING"),
    (44, "Library Annex", "library", "facility", "5.598877, 6.334466", "Library annex for additional resources", "General", "LIBRARY"),
]


def load_catalog(rows=None) -> tuple[Location, ...]:
    """Build the immutable catalog Locations"""
    locations = []
    for row_id, name, type_, category, coords, description, faculty, icon in rows or CAMPUS_ROWS:
        locations.append(Location(
            id=row_id,
            name=name,
            category=category,
            type=type_,
            coordinates=Coordinates.parse(coords),
            description=description,
            icon_key=icon,
            source=SOURCE_CATALOG,
            faculty=faculty,
        ))
    return tuple(locations)
