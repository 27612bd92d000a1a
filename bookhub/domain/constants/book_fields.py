"""Constants for Book model field names"""


class BookFields:
    """Field name constants for Book model"""
    ID = "id"
    TITLE = "title"
    AUTHOR = "author"
    ISBN = "isbn"
    PUBLISHED_YEAR = "published_year"
    TOTAL_COPIES = "total_copies"
    AVAILABLE_COPIES = "available_copies"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    
    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field
