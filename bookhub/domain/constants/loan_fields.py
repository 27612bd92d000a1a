"""Constants for Loan model field names"""


class LoanFields:
    """Field name constants for Loan model"""
    ID = "id"
    USER_ID = "user_id"
    BOOK_ID = "book_id"
    BORROWED_AT = "borrowed_at"
    DUE_DATE = "due_date"
    RETURNED_AT = "returned_at"
    STATUS = "status"
    
    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field
