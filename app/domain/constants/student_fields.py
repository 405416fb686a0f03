"""Constants for Student model field names"""


class StudentFields:
    """Field name constants for Student documents"""
    ID = "id"
    NAME = "name"
    EMAIL = "email"
    AGE = "age"
    ADDRESS = "address"
    PHOTO = "photo"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field

    # Fields matched by free-text search
    SEARCHABLE_TEXT = (NAME, EMAIL, ADDRESS)
