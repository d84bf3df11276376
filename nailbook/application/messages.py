NOT_CONFIGURED = "The booking system is not connected yet. Bookings cannot be saved at the moment."
SLOT_TAKEN = "Booking failed: this time slot may have just been taken. Please choose another time."
PLEASE_RETRY = "We could not reach the booking system. Please try again."
SHOP_CLOSED = "The salon is closed on this date. Please choose another day."
FULLY_BOOKED = "All time slots on this date are fully booked."
