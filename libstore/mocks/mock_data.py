from datetime import date

from libstore.src.schema.items import Audio, Book, Magazine, Miscellaneous, Video

# Interleaved on purpose: a save/load cycle regroups these by kind
mock_items = [
    Book(
        title="1984",
        id="B001",
        isbn="978-0451524935",
        author="George Orwell",
        status="loaned",
        loanee="jdoe",
        due_date=date(2023, 5, 1),
    ),
    Video(title="Spirited Away", id="V001", publisher="Studio Ghibli", duration="125"),
    Audio(title="Kind of Blue", id="A001", artist="Miles Davis", duration="46"),
    Book(title="Animal Farm", id="B002", isbn="978-0451526342", author="George Orwell"),
    Miscellaneous(title="Graphing Calculator", id="M001", status="reserved"),
    Magazine(title="National Geographic", id="G001", publisher="NatGeo", edition="May 2023"),
    Audio(
        title="Abbey Road",
        id="A002",
        artist="The Beatles",
        duration="47",
        status="loaned",
        loanee="asmith",
        due_date=date(2023, 6, 15),
    ),
]

mock_document = {
    "audio": [
        {"title": "Kind of Blue", "id": "A001", "status": "available", "artist": "Miles Davis", "duration": "46"},
    ],
    "book": [
        {
            "title": "1984",
            "id": "B001",
            "status": "loaned",
            "loanee": "jdoe",
            "due_date": "2023-05-01",
            "isbn": "978-0451524935",
            "author": "George Orwell",
        },
    ],
    "item": [],
    "magazine": [
        {"title": "National Geographic", "id": "G001", "publisher": "NatGeo", "edition": "May 2023"},
    ],
    "video": [],
}
