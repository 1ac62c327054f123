"""GraphQL documents sent to the remote backend."""

LOGIN = """
mutation Login($identifier: String!, $password: String!) {
  login(input: { identifier: $identifier, password: $password }) {
    jwt
    user { id username email }
  }
}
"""

REGISTER = """
mutation Register(
  $username: String!
  $email: String!
  $password: String!
  $firstName: String!
  $lastName: String!
  $phoneNumber: String!
  $area: String!
  $startPoint: String!
  $university: String!
  $faculty: String!
) {
  register(
    input: {
      username: $username
      email: $email
      password: $password
      first_name: $firstName
      last_name: $lastName
      phone_number: $phoneNumber
      area: $area
      start_point: $startPoint
      university: $university
      faculty: $faculty
    }
  ) {
    jwt
    user { id username email }
  }
}
"""

BOOKING_FIELDS = """
  first_name
  last_name
  email
  phone
  destination
  date
  trip_type
  trip_cost
  area
  start_point
  start_time
  end_time
  seats
  trip_status
  payment_type
  payment_status
"""

GET_USER_BY_ID = """
query GetUserById($id: ID!) {
  usersPermissionsUser(id: $id) {
    data {
      id
      attributes {
        username
        first_name
        last_name
        area
        phone_number
        email
        start_point
        university
        faculty
        confirmed
        subscription
        bookings {
          data {
            id
            attributes {%s}
          }
        }
      }
    }
  }
}
""" % BOOKING_FIELDS

GET_BOOKING_DASHBOARDS = """
query GetBookingDashboards {
  bookingDashboards {
    data {
      attributes {
        booking_status
        booking_start_date
        departure_time
        booking_days_count
        available_bookings_count
        cancel_friday_booking
        end_of_day_time
        notes
      }
    }
  }
}
"""

GET_AREAS = """
query GetAreas {
  areas {
    data {
      id
      attributes {
        name
        places {
          data {
            id
            attributes {
              place_name
              one_way_price
              return_price
              round_trip_price
              timing
            }
          }
        }
      }
    }
  }
}
"""

GET_UNIVERSITIES = """
query GetUniversities {
  universities {
    data {
      id
      attributes {
        university_name
        colleges(pagination: { page: 1, pageSize: 20 }) {
          data {
            id
            attributes { faculty_name }
          }
        }
      }
    }
  }
}
"""

GET_BOOKINGS_ON_DATE = """
query GetBookingsOnDate($date: Date!) {
  bookings(
    filters: { date: { eq: $date }, trip_status: { ne: "cancelled" } }
    pagination: { limit: -1 }
  ) {
    data {
      id
      attributes {%s}
    }
  }
}
""" % BOOKING_FIELDS

CREATE_BOOKING = """
mutation CreateBooking(
  $firstName: String!
  $lastName: String!
  $email: String!
  $phone: String!
  $destination: String!
  $date: Date!
  $tripType: String!
  $tripCost: Float!
  $area: String!
  $startPoint: String!
  $startTime: String!
  $endTime: String!
  $seats: Int!
  $paymentType: String!
  $userId: ID!
  $publishedAt: DateTime!
) {
  createBooking(
    data: {
      first_name: $firstName
      last_name: $lastName
      email: $email
      phone: $phone
      destination: $destination
      date: $date
      trip_type: $tripType
      trip_cost: $tripCost
      area: $area
      start_point: $startPoint
      start_time: $startTime
      end_time: $endTime
      seats: $seats
      payment_type: $paymentType
      user_id: $userId
      publishedAt: $publishedAt
    }
  ) {
    data {
      id
      attributes { first_name date publishedAt }
    }
  }
}
"""

UPDATE_BOOKING_STATUS = """
mutation UpdateBooking($id: ID!, $data: BookingInput!) {
  updateBooking(id: $id, data: $data) {
    data {
      id
      attributes { trip_status }
    }
  }
}
"""
