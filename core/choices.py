# core/choices.py
FLAG_REASON_CHOICES = [
    ('inappropriate', 'Inappropriate'),
    ('spam', 'Spam'),
    ('harassment', 'Harassment'),
    ('other', 'Other'),
]

JOURNAL_MOOD_CHOICES = [
    ('very-happy', 'Very Happy'),
    ('happy', 'Happy'),
    ('neutral', 'Neutral'),
    ('sad', 'Sad'),
    ('very-sad', 'Very Sad'),
    ('anxious', 'Anxious'),
    ('stressed', 'Stressed'),
    ('excited', 'Excited'),
    ('calm', 'Calm'),
]
