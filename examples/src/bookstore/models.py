from docrest.db.nosql import Document


class Book(Document):
    title: str = ""
    author: str = ""
    publisher: str = ""
